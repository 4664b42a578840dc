"""Parse result schema (Pydantic models).

`ParseResult` is the contract between the extraction pipeline and the transport layer. Every field
is optional: a field the rules cannot resolve is simply absent.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class PaymentIntent(StrEnum):
    """Canonical payment actions."""

    pay = "pay"
    send = "send"
    transfer = "transfer"


class ParseResult(BaseModel):
    """Best-effort structured reading of one payment sentence.

    Field names are snake_case in Python and camelCase (`amountText`, `amountValue`, ...) on the
    wire.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    intent: PaymentIntent | None = None
    amount_text: str | None = None
    amount_value: float | None = None
    currency: str | None = Field(default=None, pattern=r"^[A-Z]{3}$")
    recipient: str | None = None
    debug_dependencies: str | None = None

    @model_validator(mode="after")
    def validate_amount(self) -> ParseResult:
        """Validate that a numeric amount always comes with the text it was parsed from."""

        if self.amount_value is not None and self.amount_text is None:
            raise ValueError("amount_value requires amount_text")
        return self

    def is_empty(self) -> bool:
        """Whether no public field was resolved."""

        return all(value is None for value in response_payload(self).values())


_RESPONSE_FIELDS = {"intent", "amount_text", "amount_value", "currency", "recipient"}


def response_payload(result: ParseResult) -> dict[str, Any]:
    """Return the public JSON object for a result (camelCase keys, debug rendering excluded)."""

    return result.model_dump(mode="json", by_alias=True, include=_RESPONSE_FIELDS)
