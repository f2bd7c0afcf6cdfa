import logging

from flask import has_request_context, request

from main.config import settings

logger = logging.getLogger(__name__)


class Multilanguage:
    """Which storefront languages are configured and which one is active."""

    def __init__(self, languages=None, default_language=None):
        languages = languages if languages is not None else settings.LANGUAGES
        self.languages = [code.strip().lower() for code in languages if code.strip()]
        self.default_language = (
            default_language or settings.DEFAULT_LANGUAGE or "en"
        ).lower()
        if self.default_language not in self.languages:
            self.languages.insert(0, self.default_language)

    def is_active(self):
        return len(self.languages) > 1

    def get_default_language(self):
        return self.get_language(self.default_language)

    def get_current_language(self):
        """Resolve the language of the current request.

        `?lang=` wins over `Accept-Language`; anything unknown falls back to
        the default language.
        """
        if not self.is_active() or not has_request_context():
            return self.get_default_language()

        code = (request.args.get("lang") or "").lower()
        if code in self.languages:
            return self.get_language(code)

        best = request.accept_languages.best_match(self.languages)
        if best:
            return self.get_language(best)

        return self.get_default_language()

    def get_language(self, code):
        # Settings for the default language are stored unscoped
        prefix = "" if code == self.default_language else code
        return {"code": code, "prefix": prefix}
