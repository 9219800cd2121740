"""Built-in translations for the default reminder message."""

from typing import Callable, Dict, Optional

from storefront_signals.config import settings

DEFAULT_REMINDER_MESSAGE = "Order before it's too late!"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "fr": {
        DEFAULT_REMINDER_MESSAGE: "Commandez avant qu'il ne soit trop tard !",
    },
    "es": {
        DEFAULT_REMINDER_MESSAGE: "¡Ordene antes de que sea demasiado tarde!",
    },
    "it": {
        DEFAULT_REMINDER_MESSAGE: "Ordina prima che sia troppo tardi!",
    },
    "pt": {
        DEFAULT_REMINDER_MESSAGE: "Encomende antes que seja tarde demais!",
    },
    "de": {
        DEFAULT_REMINDER_MESSAGE: "Bestellen, bevor es zu spät ist!",
    },
}


def primary_language(locale: Optional[str]) -> str:
    """Return the primary language subtag: "fr-CA" -> "fr", "pt_BR" -> "pt"."""
    if not locale:
        return ""
    return locale.replace("_", "-").split("-")[0].lower()


def translate(text: str, locale: Optional[str] = None) -> str:
    """Translate ``text`` for ``locale``, or return it unchanged.

    Args:
        text: Source (English) string
        locale: Locale tag, defaults to the LOCALE setting

    Returns:
        Translated string, or ``text`` when no translation exists
    """
    language = primary_language(locale if locale is not None else settings.LOCALE)
    return TRANSLATIONS.get(language, {}).get(text, text)


def make_translator(locale: Optional[str] = None) -> Callable[[str], str]:
    """Build a ``translate(key)`` capability bound to a locale."""

    def _translate(text: str) -> str:
        return translate(text, locale)

    return _translate
