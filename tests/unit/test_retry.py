import pytest

from authentiometer.errors import FormatError, TransportError, ValidationError
from authentiometer.llm.retry import SYSTEM_HARDENING, USER_HARDENING, call_with_retry


def test_format_error_then_success(stub_provider):
    """
    WHY: A model that answers with prose gets one hardened second chance.
    HOW: Stub fails once with FormatError, then returns an object.
    EXPECTED: The object is returned; the second call carries the hardening suffixes on both prompts.
    """
    provider = stub_provider([FormatError("Response is not a JSON object"), {"ok": True}])

    out = call_with_retry(provider.call_json, credential="k", model="m", system_text="SYS", user_text="USER")

    assert out == {"ok": True}
    assert len(provider.calls) == 2
    first, second = provider.calls
    assert first["system_text"] == "SYS"
    assert first["user_text"] == "USER"
    assert second["system_text"] == "SYS" + SYSTEM_HARDENING
    assert second["user_text"] == "USER" + USER_HARDENING
    assert "Output ONLY valid JSON" in second["system_text"]


def test_parts_are_passed_on_both_attempts(stub_provider):
    """
    WHY: The hardened retry of an extraction must still include the video part.
    HOW: Fail once with FormatError while passing parts.
    EXPECTED: Both calls receive the same parts.
    """
    parts = [{"file_data": {"mime_type": "video/mp4", "file_uri": "https://youtu.be/a"}}, {"text": "go"}]
    provider = stub_provider([FormatError("bad"), {}])

    call_with_retry(provider.call_json, credential="k", model="m", system_text="S", user_text="", parts=parts)

    assert provider.calls[0]["parts"] == parts
    assert provider.calls[1]["parts"] == parts
    assert provider.calls[1]["user_text"] == USER_HARDENING


def test_transport_error_not_retried(stub_provider):
    """
    WHY: Auth/quota/network failures must not be masked or doubled in cost.
    HOW: Stub raises TransportError whose message even mentions JSON.
    EXPECTED: Raised unchanged after a single call.
    """
    error = TransportError("Groq HTTP 400: invalid JSON body", provider="Groq", status_code=400)
    provider = stub_provider([error, {"never": "reached"}])

    with pytest.raises(TransportError) as exc:
        call_with_retry(provider.call_json, credential="k", model="m", system_text="S", user_text="U")
    assert exc.value is error
    assert len(provider.calls) == 1


def test_validation_error_not_retried(stub_provider):
    """
    WHY: Input problems won't fix themselves on a second call.
    HOW: Stub raises ValidationError.
    EXPECTED: Raised after one call.
    """
    provider = stub_provider([ValidationError("nope"), {}])
    with pytest.raises(ValidationError):
        call_with_retry(provider.call_json, credential="k", model="m", system_text="S", user_text="U")
    assert len(provider.calls) == 1


def test_second_format_error_propagates(stub_provider):
    """
    WHY: Total attempts per call site is capped at two.
    HOW: Stub fails with FormatError three times in a row.
    EXPECTED: FormatError raised after exactly two calls.
    """
    provider = stub_provider([FormatError("first"), FormatError("second"), {}])
    with pytest.raises(FormatError, match="second"):
        call_with_retry(provider.call_json, credential="k", model="m", system_text="S", user_text="U")
    assert len(provider.calls) == 2


def test_success_first_time_single_call(stub_provider):
    """
    WHY: Well-behaved models cost exactly one call.
    HOW: Stub returns an object immediately.
    EXPECTED: One call, unmodified prompts.
    """
    provider = stub_provider([{"a": 1}])
    assert call_with_retry(provider.call_json, credential="k", model="m", system_text="S", user_text="U") == {"a": 1}
    assert len(provider.calls) == 1
    assert provider.calls[0]["system_text"] == "S"
