# 🌐 catalog_ingest/infrastructure/web/__init__.py
"""🌐 Браузерний шар: відбиток клієнта, маскування автоматизації, сесія Playwright."""

from .browser_session import BrowserSession, default_initializers
from .fingerprint import ClientFingerprint, Viewport, generate_fingerprint
from .stealth import InitScriptStealth, PlaywrightStealth, SessionInitializer

__all__ = [
    "BrowserSession",
    "ClientFingerprint",
    "InitScriptStealth",
    "PlaywrightStealth",
    "SessionInitializer",
    "Viewport",
    "default_initializers",
    "generate_fingerprint",
]
