"""aiogram message handlers.

Hard contract: every incoming message produces exactly one reply, a JSON object with the keys
`intent`, `amountText`, `amountValue`, `currency` and `recipient` (null when absent). Empty text,
commands and internal errors reply with the all-null object.
"""

from __future__ import annotations

import asyncio
import json
import logging
from time import monotonic

from aiogram.types import Message

from src.app import App
from src.nlp.schema import ParseResult, response_payload

logger = logging.getLogger(__name__)


def _is_command_text(text: str) -> bool:
    return text.lstrip().startswith("/")


def render_reply(result: ParseResult) -> str:
    """Serialize the public fields of a result as the reply text."""

    return json.dumps(response_payload(result), ensure_ascii=False)


async def handle_message(message: Message, app: App) -> None:
    """Handle any incoming Telegram message and reply with exactly one JSON object."""

    started = monotonic()
    result = ParseResult()

    # noinspection PyBroadException
    try:
        raw_text = (message.text or message.caption or "")
        if not raw_text.strip() or _is_command_text(raw_text):
            await message.answer(render_reply(result))
            return

        # Annotation is CPU-bound; keep the event loop free.
        result = await asyncio.to_thread(app.parser.parse, raw_text)

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "handled intent=%s currency=%s has_amount=%s has_recipient=%s latency_ms=%d",
            result.intent,
            result.currency,
            result.amount_value is not None,
            result.recipient is not None,
            latency_ms,
        )
    except Exception:
        # Handler boundary: any internal error must still produce the all-null reply,
        # without leaking details.
        logger.exception("handler failed")
        result = ParseResult()

    await message.answer(render_reply(result))
