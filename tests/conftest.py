# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Додаємо src в sys.path, щоб працював імпорт "catalog_ingest.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def no_sleep():
    """Фейковий sleep: записує запитані паузи замість реального очікування."""
    calls: list[float] = []

    async def _sleep(seconds: float) -> None:
        calls.append(seconds)

    _sleep.calls = calls  # type: ignore[attr-defined]
    return _sleep
