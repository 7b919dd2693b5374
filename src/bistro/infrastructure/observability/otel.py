from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

from bistro.infrastructure.config import otel_console_enabled, otel_service_name

_OTEL_CONFIGURED = False
logger = logging.getLogger(__name__)


def configure_otel() -> None:
    global _OTEL_CONFIGURED
    if _OTEL_CONFIGURED:
        return

    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: otel_service_name()}))
    if otel_console_enabled():
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        logger.info("otel_console_exporter_enabled")

    trace.set_tracer_provider(provider)
    _OTEL_CONFIGURED = True
