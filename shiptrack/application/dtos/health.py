"""DTOs for health checks."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DependencyStatus:
    """Result of probing one backing store. status is 'up', 'down' or 'disabled'."""

    status: str
    latency_ms: int | None = None
    error: str | None = None

    @property
    def is_up(self) -> bool:
        return self.status == "up"


@dataclass(frozen=True)
class HealthReport:
    status: str
    timestamp: datetime
    uptime_seconds: int
    database: DependencyStatus
    cache: DependencyStatus

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"
