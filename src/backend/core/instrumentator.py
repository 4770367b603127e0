"""
Prometheus HTTP instrumentation.

Request count, latency and size metrics for every route, exposed
together with core.metrics at /metrics.
"""

from prometheus_fastapi_instrumentator import Instrumentator

instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    excluded_handlers=["/metrics", "/health"],
)
