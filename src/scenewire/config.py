"""Container configuration sourced from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ["WiringConfig", "load_config"]

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class WiringConfig:
    """Immutable settings for a :class:`~scenewire.lifecycle.Container`.

    Attributes:
        atomic_injection: Resolve every field and method argument of an instance
            before touching it, so a missing dependency leaves the instance
            unmodified. When False, fields are assigned one at a time and those
            set before a failure stay set.
        include_private: Also scan single-underscore members for tags. Dunder
            names are never scanned.
        log_level: Level used by :func:`scenewire.logging.configure_logging`.
    """

    atomic_injection: bool = True
    include_private: bool = True
    log_level: str = "WARNING"


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def _log_level(env: Mapping[str, str], default: str) -> str:
    value = env.get("SCENEWIRE_LOG_LEVEL")
    if value is None:
        value = env.get("LOG_LEVEL", default)
    return value.strip().upper() or default


def load_config(env: Optional[Mapping[str, str]] = None) -> WiringConfig:
    """Load a :class:`WiringConfig` from environment variables.

    Recognised variables are ``SCENEWIRE_ATOMIC_INJECTION``,
    ``SCENEWIRE_INCLUDE_PRIVATE`` and ``SCENEWIRE_LOG_LEVEL`` (falling back to
    ``LOG_LEVEL``). Unrecognised flag values keep the default.

    Args:
        env: Mapping to read from; defaults to ``os.environ``.
    """
    if env is None:
        env = os.environ
    defaults = WiringConfig()
    return WiringConfig(
        atomic_injection=_flag(env, "SCENEWIRE_ATOMIC_INJECTION", defaults.atomic_injection),
        include_private=_flag(env, "SCENEWIRE_INCLUDE_PRIVATE", defaults.include_private),
        log_level=_log_level(env, defaults.log_level),
    )
