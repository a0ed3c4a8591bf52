"""Services package"""
from typeflip.config import settings
from typeflip.services.translator import TernaryTranslator

_translator = None


def get_translator() -> TernaryTranslator:
    """Translator configured from settings, created on first use"""
    global _translator
    if _translator is None:
        _translator = TernaryTranslator(
            bottom_sentinel=settings.BOTTOM_SENTINEL,
            indent_size=settings.INDENT_SIZE,
        )
    return _translator


__all__ = [
    "get_translator",
]
