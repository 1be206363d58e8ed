import pytest
from pydantic import ValidationError

from message_service.domain.models import Message


def test_message_defaults_to_empty_value():
    assert Message().value == ""


@pytest.mark.parametrize("body", [b"", b"   ", b"\n"])
def test_from_body_treats_blank_body_as_empty_value(body: bytes):
    assert Message.from_body(body) == Message(value="")


def test_from_body_reads_value_and_ignores_extra_fields():
    message = Message.from_body(b'{"value": "hi", "ignored": true}')
    assert message.value == "hi"
    assert message.model_dump() == {"value": "hi"}


def test_from_body_missing_value_is_empty():
    assert Message.from_body(b"{}").value == ""


@pytest.mark.parametrize("body", [b"{", b"null", b'{"value": 1}', b'"text"'])
def test_from_body_strict_rejects_malformed_input(body: bytes):
    with pytest.raises(ValidationError):
        Message.from_body(body, strict=True)


@pytest.mark.parametrize("body", [b"{", b"null", b'{"value": 1}'])
def test_from_body_lenient_degrades_to_empty_value(body: bytes):
    assert Message.from_body(body, strict=False) == Message()


def test_message_is_immutable():
    message = Message(value="fixed")
    with pytest.raises(ValidationError):
        message.value = "changed"
