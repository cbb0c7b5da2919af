"""OpenTelemetry wiring for the analytics API.

Traces, metrics and (optionally) log records are shipped over OTLP/gRPC.
Nothing is configured unless ``telemetry_enabled`` is set, so tests and the
CLI run against the no-op API providers.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes

from trade_journal import __version__
from trade_journal.config import AppSettings

logger = logging.getLogger(__name__)

_initialised = False


def build_resource(settings: AppSettings) -> Resource:
    return Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: settings.telemetry_service_name or settings.app_name,
            ResourceAttributes.SERVICE_NAMESPACE: "trade-journal",
            ResourceAttributes.SERVICE_VERSION: __version__,
            "trade_journal.benchmark_symbol": settings.benchmark_symbol,
        }
    )


def _exporter_kwargs(settings: AppSettings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"insecure": settings.telemetry_otlp_insecure}
    if settings.telemetry_otlp_endpoint:
        kwargs["endpoint"] = settings.telemetry_otlp_endpoint
    return kwargs


def _tracer_provider(resource: Resource, settings: AppSettings) -> TracerProvider:
    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_ratio)),
    )
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**_exporter_kwargs(settings))))
    return provider


def _meter_provider(resource: Resource, settings: AppSettings) -> MeterProvider:
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(**_exporter_kwargs(settings)),
        export_interval_millis=settings.telemetry_metric_interval_ms,
    )
    return MeterProvider(resource=resource, metric_readers=[reader])


def _export_logs(resource: Resource, settings: AppSettings) -> None:
    provider = LoggerProvider(resource=resource)
    provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter(**_exporter_kwargs(settings))))
    set_logger_provider(provider)
    # Adds trace and span ids to stdlib log records.
    LoggingInstrumentor().instrument(set_logging_format=False)


def setup_telemetry(app: FastAPI, settings: AppSettings) -> bool:
    """Install global providers and instrument ``app``.

    Returns ``True`` when instrumentation is active after the call. Providers
    are process-wide, so repeated calls are no-ops.
    """

    global _initialised  # noqa: PLW0603

    if _initialised:
        return True
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled via configuration")
        return False

    resource = build_resource(settings)
    tracer_provider = _tracer_provider(resource, settings)
    meter_provider = _meter_provider(resource, settings)
    trace.set_tracer_provider(tracer_provider)
    metrics.set_meter_provider(meter_provider)
    if settings.telemetry_export_logs:
        _export_logs(resource, settings)

    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=tracer_provider,
        meter_provider=meter_provider,
        excluded_urls="health",
    )

    _initialised = True
    logger.info(
        "Telemetry exporting to %s (sample ratio %.2f)",
        settings.telemetry_otlp_endpoint or "default OTLP endpoint",
        settings.telemetry_sample_ratio,
    )
    return True


__all__ = ["build_resource", "setup_telemetry"]
