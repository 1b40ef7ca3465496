import time
from collections.abc import Awaitable, Callable
from functools import wraps

from prometheus_client import Counter, Histogram


PAYMENT_REQUESTS_TOTAL = Counter(
    "payment_requests_total",
    "Total number of payment requests",
    ["status", "error_code"],
)

PAYMENT_DURATION_SECONDS = Histogram(
    "payment_duration_seconds",
    "Payment processing duration",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

BATCH_SIZE = Histogram(
    "payment_batch_size",
    "Number of payments per batch request",
    buckets=[1, 2, 5, 10, 25, 50, 100],
)

COMPLIANCE_FLAGS_TOTAL = Counter(
    "compliance_flags_total",
    "Total number of compliance flags raised",
    ["flag"],
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration",
    ["method", "path", "status_code"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)


def track_payment_duration[**P, R](
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            duration = time.perf_counter() - start
            PAYMENT_DURATION_SECONDS.observe(duration)

    return wrapper
