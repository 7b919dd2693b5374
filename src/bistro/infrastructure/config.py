from __future__ import annotations

import os
from functools import lru_cache

from bistro.domain.order.observers import NotificationMode
from bistro.domain.order.status import TransitionPolicy

_TRUTHY = {"1", "true", "yes", "on"}


def _env_choice(name: str, default: str, allowed: set[str]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in allowed:
        raise ValueError(f"{name} must be one of {sorted(allowed)}, got {value!r}")
    return value


@lru_cache(maxsize=1)
def default_currency() -> str:
    currency = os.getenv("BISTRO_CURRENCY", "USD").strip()
    if len(currency) != 3 or not currency.isalpha() or not currency.isupper():
        raise ValueError("BISTRO_CURRENCY must be a 3-letter uppercase code")
    return currency


@lru_cache(maxsize=1)
def transition_policy() -> TransitionPolicy:
    allowed = {policy.value for policy in TransitionPolicy}
    return TransitionPolicy(_env_choice("BISTRO_TRANSITION_POLICY", "permissive", allowed))


@lru_cache(maxsize=1)
def notification_mode() -> NotificationMode:
    allowed = {mode.value for mode in NotificationMode}
    return NotificationMode(_env_choice("BISTRO_NOTIFICATION_MODE", "all", allowed))


def log_level() -> str:
    return os.getenv("BISTRO_LOG_LEVEL", "INFO").upper()


def otel_service_name() -> str:
    return os.getenv("OTEL_SERVICE_NAME", "bistro-orders")


def otel_console_enabled() -> bool:
    return os.getenv("BISTRO_OTEL_CONSOLE", "").strip().lower() in _TRUTHY


def clear_cache() -> None:
    default_currency.cache_clear()
    transition_policy.cache_clear()
    notification_mode.cache_clear()
