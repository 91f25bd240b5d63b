"""OpenTelemetry tracing helpers for contract-rule retrieval.

Spans are discarded by the no-op global provider until `configure_tracing`
is called, so the service can be traced unconditionally.

Usage with an OTLP backend:

    from contract_rules.tracing import configure_tracing, get_tracer, traced_search

    configure_tracing(endpoint="http://localhost:6006/v1/traces")
    wrapped = traced_search(service.search, get_tracer("contract-rules.search"))
    results = wrapped("What is the compensation fee?")

Usage without a backend (development / testing):

    configure_tracing()   # uses ConsoleSpanExporter by default
"""
from __future__ import annotations

from typing import Callable

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from .schema import ScoredResult

# ---------------------------------------------------------------------------
# Span attribute names
# ---------------------------------------------------------------------------

ATTR_INPUT_VALUE = "input.value"
ATTR_OUTPUT_LENGTH = "output.length"
ATTR_RETRIEVAL_DOCUMENTS = "retrieval.documents"
ATTR_PRICING_INTENT = "contract_rules.pricing_intent"
ATTR_FAQ_MATCHES = "contract_rules.faq_matches"

# ---------------------------------------------------------------------------
# Provider lifecycle helpers
# ---------------------------------------------------------------------------

_provider: TracerProvider | None = None


def configure_tracing(
    endpoint: str | None = None,
    service_name: str = "contract-rules",
    exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Create and register a global TracerProvider.

    Args:
        endpoint: OTLP HTTP endpoint URL to send traces to. When *None* and
            no custom *exporter* is given, spans are printed to stdout via
            :class:`~opentelemetry.sdk.trace.export.ConsoleSpanExporter`.
        service_name: Label identifying this application in the backend.
        exporter: An already-constructed span exporter, e.g. an
            ``InMemorySpanExporter`` in tests. When provided, *endpoint* is
            ignored.

    Returns:
        The configured provider, also installed as the global OTel provider.
    """
    global _provider

    resource = Resource(attributes={SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

    if exporter is not None:
        chosen_exporter: SpanExporter = exporter
    elif endpoint is not None:
        try:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
                OTLPSpanExporter,
            )
        except ImportError as exc:  # pragma: no cover
            raise ImportError(
                "opentelemetry-exporter-otlp-proto-http is required to export "
                "traces to an OTLP endpoint.  Install it with:\n"
                "  pip install 'contract-rules-retrieval[otlp]'"
            ) from exc
        chosen_exporter = OTLPSpanExporter(endpoint=endpoint)
    else:
        chosen_exporter = ConsoleSpanExporter()

    # Search calls are short and synchronous; export each span immediately.
    provider.add_span_processor(SimpleSpanProcessor(chosen_exporter))
    trace.set_tracer_provider(provider)
    _provider = provider
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer from the provider set by `configure_tracing`, or the no-op global one."""
    if _provider is not None:
        return _provider.get_tracer(name)
    return trace.get_tracer(name)


# ---------------------------------------------------------------------------
# Span-wrapping helpers
# ---------------------------------------------------------------------------


def traced_search(
    search_fn: Callable[[str], list[ScoredResult]],
    tracer: trace.Tracer,
) -> Callable[[str], list[ScoredResult]]:
    """Wrap a search callable so every call is recorded as a ``"search"`` span.

    The span records the query (``input.value``), the number of ranked
    results (``retrieval.documents``) and an OK/ERROR status. Exceptions are
    recorded on the span and re-raised.
    """

    def _wrapped(query: str) -> list[ScoredResult]:
        with tracer.start_as_current_span("search") as span:
            span.set_attribute(ATTR_INPUT_VALUE, query)
            try:
                results = search_fn(query)
                span.set_attribute(ATTR_RETRIEVAL_DOCUMENTS, len(results))
                span.set_status(trace.StatusCode.OK)
                return results
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise

    return _wrapped
