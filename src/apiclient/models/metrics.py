from pydantic import BaseModel, ConfigDict


class MetricsSnapshot(BaseModel):
    """Point-in-time view of the metrics aggregator, read under one lock."""

    model_config = ConfigDict(frozen=True)

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    requests_per_minute: float = 0.0
    success_rate: float = 0.0
