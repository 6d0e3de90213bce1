from prometheus_client import Counter, Histogram, REGISTRY


# uvicorn --reload and the test suite import this module more than once
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # already registered under this name
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "lifecapture_requests_total",
    "Extraction requests by endpoint and outcome",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "lifecapture_request_latency_seconds",
    "End-to-end extraction latency",
    Histogram,
    labelnames=["endpoint"],
    buckets=(0.5, 1, 2.5, 5, 10, 20, 30, 60, 120),
)

EXTRACTIONS_TOTAL = get_or_create_metric(
    "lifecapture_extractions_total",
    "Screenshots extracted, by classified type",
    Counter,
    labelnames=["type"],
)

HOST_BACKFILL_TOTAL = get_or_create_metric(
    "lifecapture_host_backfill_total",
    "Event host backfill attempts from OCR text",
    Counter,
    labelnames=["outcome"],
)
