# 🚨 catalog_ingest/errors/__init__.py
"""🚨 Публічні винятки конвеєра імпорту."""

from .custom_errors import AppError, ErrorCode, InputError, TransientFetchError

__all__ = [
    "AppError",
    "ErrorCode",
    "InputError",
    "TransientFetchError",
]
