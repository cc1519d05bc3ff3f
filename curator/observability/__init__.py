# noqa: D104 - package initialization
from .logging import JsonFormatter, RequestContextFilter, configure_structured_logging  # noqa: F401
from .metrics import (  # noqa: F401
    metrics_blueprint,
    observe_upstream_latency,
    record_recommendation,
    record_seed_addition,
    record_token_exchange,
    update_session_gauge,
)
