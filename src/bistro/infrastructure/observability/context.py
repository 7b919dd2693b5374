from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
from uuid import uuid4

correlation_id_context: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    return correlation_id_context.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    value = correlation_id or str(uuid4())
    token = correlation_id_context.set(value)
    try:
        yield value
    finally:
        correlation_id_context.reset(token)
