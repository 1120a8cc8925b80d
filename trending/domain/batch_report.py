from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

MAX_REPORTED_ERRORS = 10


class BatchRunStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"


@dataclass
class BatchReport:
    collected_at: datetime
    status: BatchRunStatus = BatchRunStatus.RUNNING
    total_partitions: int = 0
    total_collected: int = 0
    total_errors: int = 0
    errors: list[str] = field(default_factory=list)
    duration_ms: int = 0

    def record_success(self, count: int) -> None:
        self.total_collected += count

    def record_failure(self, message: str) -> None:
        self.total_errors += 1
        if len(self.errors) < MAX_REPORTED_ERRORS:
            self.errors.append(message)

    def finish(self, duration_ms: int) -> None:
        self.duration_ms = duration_ms
        self.status = BatchRunStatus.COMPLETED_WITH_ERRORS if self.total_errors else BatchRunStatus.COMPLETED

    def to_dict(self) -> dict:
        return {
            "success": True,
            "status": self.status.value,
            "totalPartitions": self.total_partitions,
            "totalCollected": self.total_collected,
            "totalErrors": self.total_errors,
            "errors": self.errors[:MAX_REPORTED_ERRORS],
            "collectedAt": self.collected_at.isoformat(),
            "durationMs": self.duration_ms,
        }
