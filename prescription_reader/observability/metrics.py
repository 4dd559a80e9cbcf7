from prometheus_client import Counter, Histogram

# -------------------------
# Analysis metrics
# -------------------------

ANALYSIS_REQUESTS_TOTAL = Counter(
    "analysis_requests_total",
    "Total image analysis requests by outcome",
    ["mode", "result", "model"],
)

MODEL_CALL_SECONDS = Histogram(
    "model_call_seconds",
    "Hosted model round-trip latency in seconds",
    ["mode", "model"],
)

UPLOAD_BYTES = Histogram(
    "upload_bytes",
    "Size of accepted image uploads in bytes",
    buckets=(64e3, 256e3, 1e6, 2e6, 5e6, 10e6, 20e6),
)
