# 🧪 tests/errors/test_custom_errors.py
from __future__ import annotations

from catalog_ingest.errors import AppError, ErrorCode, InputError, TransientFetchError


def test_input_error_is_value_error_with_log_extra() -> None:
    err = InputError("Invalid AliExpress product URL", url="https://example.com")
    assert isinstance(err, ValueError)
    assert isinstance(err, AppError)
    assert str(err) == "Invalid AliExpress product URL"
    assert err.to_log_extra() == {"error_code": ErrorCode.INPUT, "url": "https://example.com"}


def test_transient_fetch_error_uses_generic_message() -> None:
    err = TransientFetchError(url="https://www.aliexpress.com/item/1.html", details="TimeoutError")
    assert err.message == "Failed to navigate to product page. Please try again later."
    assert "TimeoutError" not in str(err)
    assert err.to_log_extra()["details"] == "TimeoutError"
    assert err.code == ErrorCode.NETWORK
