# 🚦 catalog_ingest/infrastructure/throttling/__init__.py
"""🚦 Обмеження темпу запитів: rate limiter, FIFO-черга, повтори з бекоффом."""

from .rate_limiter import RateLimiter
from .request_queue import QueueEntry, RequestQueue
from .retry import random_delay, retry_with_backoff

__all__ = ["QueueEntry", "RateLimiter", "RequestQueue", "random_delay", "retry_with_backoff"]
