"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

price_estimates = Counter(
    'price_estimates_total',
    'Total price estimates by outcome',
    ['outcome'],
    registry=registry
)

catalog_lookups = Counter(
    'catalog_lookups_total',
    'Total pricing catalog lookups',
    ['operation', 'source', 'status'],
    registry=registry
)

catalog_lookup_duration = Histogram(
    'catalog_lookup_duration_seconds',
    'Pricing catalog lookup duration in seconds',
    ['operation', 'source'],
    registry=registry
)


def track_catalog_lookup(operation: str):
    """Decorator to track pricing catalog lookup metrics.

    The decorated coroutine must be a method of an object with a ``source``
    attribute.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            start_time = time.time()
            source = str(self.source)
            try:
                result = await func(self, *args, **kwargs)
                catalog_lookups.labels(
                    operation=operation,
                    source=source,
                    status='success'
                ).inc()
                return result
            except Exception:
                catalog_lookups.labels(
                    operation=operation,
                    source=source,
                    status='error'
                ).inc()
                raise
            finally:
                catalog_lookup_duration.labels(
                    operation=operation,
                    source=source
                ).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')
