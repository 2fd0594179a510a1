"""OpenTelemetry setup for the search service.

One TracerProvider per process, built from Settings at startup. FastAPI
requests (health excluded) and SQLAlchemy statements are instrumented, so the
per-source queries of a search show up as children of its aggregate span.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

if TYPE_CHECKING:
    from leaddesk.core.config import Settings

logger = logging.getLogger(__name__)

UNTRACED_URLS = "/api/v1/health"


def build_exporter(kind: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Exporter for kind ("console", "otlp" or "none"); unknown kinds fall back to console."""
    if kind == "none":
        return None
    if kind == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("OTLP exporter selected without an endpoint, using console")
    elif kind != "console":
        logger.warning("Unknown exporter type '%s', using console", kind)
    return ConsoleSpanExporter()


class SearchTelemetry:
    """Owns the process TracerProvider and the instrumentations hooked to it."""

    def __init__(self, provider: TracerProvider) -> None:
        self.provider = provider

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchTelemetry | None:
        """Install a global provider; None when disabled or when setup fails."""
        if not settings.telemetry_enabled:
            return None
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: settings.app_name,
                        SERVICE_VERSION: settings.app_version,
                        "deployment.environment": settings.telemetry_environment,
                    }
                ),
                sampler=TraceIdRatioBased(settings.telemetry_sample_rate),
            )
            exporter = build_exporter(
                settings.telemetry_exporter, settings.telemetry_otlp_endpoint
            )
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Failed to initialize telemetry")
            return None
        logger.info(
            "OpenTelemetry initialized: service=%s exporter=%s sample_rate=%s",
            settings.app_name,
            settings.telemetry_exporter,
            settings.telemetry_sample_rate,
        )
        return cls(provider)

    def instrument(self, app: FastAPI, engine: AsyncEngine | None = None) -> None:
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.provider, excluded_urls=UNTRACED_URLS
            )
            if engine is not None:
                SQLAlchemyInstrumentor().instrument(
                    engine=engine.sync_engine,
                    tracer_provider=self.provider,
                    enable_commenter=True,
                )
        except Exception:
            logger.exception("Failed to instrument the search service")

    def shutdown(self) -> None:
        """Flush pending spans."""
        try:
            self.provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")


_telemetry: SearchTelemetry | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> SearchTelemetry | None:
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: SearchTelemetry | None) -> None:
    """Register the process telemetry (startup) or forget it (shutdown)."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
