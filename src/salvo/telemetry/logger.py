"""Logging helpers with optional OpenTelemetry support."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry.instrumentation.logging import LoggingInstrumentor

if TYPE_CHECKING:
    from .config import TelemetryConfig

CONSOLE_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s "
    "| trace_id=%(otelTraceID)s span_id=%(otelSpanID)s"
)

_CONSOLE_HANDLER: logging.Handler | None = None
_OTLP_HANDLER_INSTALLED = False


class _OtelContextFilter(logging.Filter):
    """Ensures trace/span placeholders exist even when no context is active."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = "-"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = "-"
        return True


def get_logger(name: str = "salvo") -> logging.Logger:
    return logging.getLogger(name)


def configure_console(level: int = logging.WARNING) -> logging.Handler:
    """Attach a single stderr handler to the root logger and set its level."""
    global _CONSOLE_HANDLER
    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, logging.INFO))
    if _CONSOLE_HANDLER is None:
        _CONSOLE_HANDLER = logging.StreamHandler()
        _CONSOLE_HANDLER.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        _CONSOLE_HANDLER.addFilter(_OtelContextFilter())
        root_logger.addHandler(_CONSOLE_HANDLER)
    _CONSOLE_HANDLER.setLevel(level)
    return _CONSOLE_HANDLER


def init_logging(config: TelemetryConfig) -> logging.Logger:
    """Correlate log records with spans and ship them over OTLP."""
    logger = get_logger(config.service_name)
    LoggingInstrumentor().instrument(set_logging_format=False)
    try:
        from opentelemetry._logs import set_logger_provider
        from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
        from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
        from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
    except ImportError:  # pragma: no cover
        return logger

    from .tracer import build_resource

    provider = LoggerProvider(resource=build_resource(config))
    if config.otlp_logs_endpoint:
        exporter = OTLPLogExporter(endpoint=config.otlp_logs_endpoint, insecure=True)
        provider.add_log_record_processor(BatchLogRecordProcessor(exporter))

    set_logger_provider(provider)
    _install_otlp_handler(LoggingHandler(level=logging.INFO, logger_provider=provider))
    return logger


def _install_otlp_handler(handler: logging.Handler) -> None:
    """Attach the OTLP logging handler to the root logger once."""
    global _OTLP_HANDLER_INSTALLED
    if _OTLP_HANDLER_INSTALLED:
        return
    handler.addFilter(_OtelContextFilter())
    logging.getLogger().addHandler(handler)
    _OTLP_HANDLER_INSTALLED = True
