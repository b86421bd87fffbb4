"""Application settings read from the environment.

Domain configuration (providers, brokers, event store) stays with Protean and
is selected through ``PROTEAN_ENV``. The values here cover the web layer and
the few behaviour switches of the ordering domain.
"""

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    cart_dir: Path
    strict_status_transitions: bool
    currency_symbol: str
    cors_origins: tuple[str, ...]
    log_dir: str | None

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("BAKEHOUSE_CORS_ORIGINS", "*")
        return cls(
            cart_dir=Path(os.getenv("BAKEHOUSE_CART_DIR", ".carts")),
            strict_status_transitions=_flag("BAKEHOUSE_STRICT_STATUS_TRANSITIONS"),
            currency_symbol=os.getenv("BAKEHOUSE_CURRENCY_SYMBOL", "$"),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            log_dir=os.getenv("BAKEHOUSE_LOG_DIR") or None,
        )


def get_settings() -> Settings:
    """Read settings fresh on every call; the environment is the source of truth."""
    return Settings.from_env()
