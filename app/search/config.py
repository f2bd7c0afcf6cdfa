from dataclasses import dataclass
from typing import Optional

from main.config import settings as default_settings

TRUTHY = {"yes", "true", "1", "on"}


def _is_truthy(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY


@dataclass(frozen=True)
class InternalSearchConfig:
    """Credentials and limits for internal search, resolved for one language."""

    enabled: bool = False
    api_key: str = ""
    hashid: str = ""
    language: str = ""
    results_per_page: int = 10000
    api_url: Optional[str] = None
    timeout: float = 5.0

    def is_enabled(self) -> bool:
        return bool(self.enabled) and bool(self.api_key) and bool(self.hashid)

    @property
    def masked_api_key(self) -> str:
        if not self.api_key:
            return ""
        zone, _, secret = self.api_key.partition("-")
        return f"{zone}-{'*' * 8}{secret[-4:]}" if secret else "*" * 8

    @classmethod
    def from_settings(cls, settings=None, language: str = "") -> "InternalSearchConfig":
        settings = settings or default_settings
        language = language or ""

        return cls(
            enabled=_is_truthy(settings.DOOFINDER_ENABLED),
            api_key=(settings.get("DOOFINDER_API_KEY", language) or "").strip(),
            hashid=(settings.get("DOOFINDER_HASHID", language) or "").strip(),
            language=language,
            results_per_page=int(settings.DOOFINDER_RESULTS_PER_PAGE),
            api_url=settings.DOOFINDER_API_URL or None,
            timeout=float(settings.DOOFINDER_TIMEOUT),
        )


def is_enabled(config: InternalSearchConfig) -> bool:
    """True only when the flag is on and both credentials are present."""
    return config.is_enabled()
