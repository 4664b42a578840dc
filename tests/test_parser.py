"""End-to-end tests for the payment parser with a fake annotator."""

from __future__ import annotations

import pytest

from src.nlp.parser import PaymentParser, parse_payment
from src.nlp.schema import PaymentIntent


class _ExplodingAnnotator:
    def annotate(self, text: str):
        raise RuntimeError("annotator down")


@pytest.mark.parametrize("text", [None, "", "   \t  ", "\n"])
def test_blank_input_short_circuits(text, fake_annotator) -> None:
    result = PaymentParser(fake_annotator).parse(text)

    assert result.is_empty()
    assert result.debug_dependencies is None
    assert fake_annotator.calls == []


def test_no_sentence_gives_empty_result(fake_annotator) -> None:
    result = PaymentParser(fake_annotator).parse("unknown to the fake annotator")
    assert result.is_empty()
    assert fake_annotator.calls == ["unknown to the fake annotator"]


def test_parse_dollar_symbol_and_dependency_recipient(fake_annotator) -> None:
    result = PaymentParser(fake_annotator).parse("could you please send  $15  to gaby?")

    assert result.intent == PaymentIntent.send
    assert result.amount_text == "$15"
    assert result.amount_value == pytest.approx(15.0)
    assert result.currency == "USD"
    assert result.recipient == "gaby"
    assert result.debug_dependencies is not None
    assert "nmod:to(send-4, gaby-8)" in result.debug_dependencies


def test_parse_word_currency_and_person(fake_annotator) -> None:
    result = PaymentParser(fake_annotator).parse("send 20 dollars to John.")

    assert result.intent == PaymentIntent.send
    assert result.amount_text.lower() == "20 dollars"
    assert result.amount_value == pytest.approx(20.0)
    assert result.currency == "USD"
    assert result.recipient == "John"


def test_parse_euro_thousands_and_handle(fake_annotator) -> None:
    result = PaymentParser(fake_annotator).parse("transfer €1,234.50 to @alex99")

    assert result.intent == PaymentIntent.transfer
    assert "€" in result.amount_text
    assert result.amount_value == pytest.approx(1234.50)
    assert result.currency == "EUR"
    assert result.recipient == "@alex99"
    assert result.debug_dependencies is None


def test_parse_spanish_sentence(fake_annotator) -> None:
    result = PaymentParser(fake_annotator).parse("enviar 20 euros a Juan.")

    assert result.intent == PaymentIntent.send
    assert "20" in result.amount_text
    assert "euro" in result.amount_text.lower()
    assert result.amount_value == pytest.approx(20.0)
    assert result.currency == "EUR"
    assert result.recipient == "Juan"


def test_parse_keeps_determiner_in_recipient(fake_annotator) -> None:
    result = PaymentParser(fake_annotator).parse("send $10 to the coffee shop.")

    assert result.intent == PaymentIntent.send
    assert result.currency == "USD"
    assert result.amount_value == pytest.approx(10.0)
    assert result.recipient == "the coffee shop"


def test_parse_is_idempotent(fake_annotator) -> None:
    parser = PaymentParser(fake_annotator)
    first = parser.parse("send $10 to the coffee shop.")
    second = parser.parse("send $10 to the coffee shop.")
    assert first == second


def test_annotator_failure_degrades_to_empty_result() -> None:
    result = PaymentParser(_ExplodingAnnotator()).parse("send $5 to Ana")
    assert result.is_empty()


def test_extractor_failure_only_drops_its_field(fake_annotator, monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*_args, **_kwargs):
        raise RuntimeError("recipient rules broke")

    monkeypatch.setattr("src.nlp.parser.extract_recipient", _boom)
    result = PaymentParser(fake_annotator).parse("send 20 dollars to John.")

    assert result.recipient is None
    assert result.intent == PaymentIntent.send
    assert result.currency == "USD"


def test_configured_prepositions_are_used(make_sentence) -> None:
    class _Annotator:
        def annotate(self, text: str):
            return [
                make_sentence(
                    text,
                    [("pay", "pay", "VB"), ("rent", "rent", "NN"), ("for", "for", "CC"), ("Bob", "Bob", "NNP")],
                )
            ]

    assert PaymentParser(_Annotator(), prepositions=["FOR"]).parse("pay rent for Bob").recipient == "Bob"
    assert PaymentParser(_Annotator()).parse("pay rent for Bob").recipient is None


def test_parse_payment_wrapper(fake_annotator) -> None:
    result = parse_payment("send 20 dollars to John.", annotator=fake_annotator)
    assert result.recipient == "John"


def test_blank_money_entity_leaves_amount_absent(make_sentence) -> None:
    class _Annotator:
        def annotate(self, text: str):
            return [make_sentence(text, [("pay", "pay", "VB")], mentions=[("   ", "MONEY")])]

    result = PaymentParser(_Annotator()).parse("pay Ana")
    assert result.amount_text is None
    assert result.amount_value is None
