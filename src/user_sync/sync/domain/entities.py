"""
Sync Domain Entities
====================

Pure Python types describing a sync run.

A run walks the stages of SyncStage in order and ends in exactly one of the
terminal stages, DELIVERED or FAILED. SyncResult is the value the
orchestrator hands back to the process boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from user_sync.core import ApplicationException

# Row as returned by the driver, keyed by column name
RawUserRecord = Mapping[str, Any]


class SyncStage(str, Enum):
    """Stages of a sync run."""
    IDLE = "idle"
    CONFIG_RESOLVED = "config_resolved"
    USERS_FETCHED = "users_fetched"
    USERS_MAPPED = "users_mapped"
    DELIVERED = "delivered"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SyncStage.DELIVERED, SyncStage.FAILED)


@dataclass(frozen=True)
class SyncResult:
    """
    Terminal outcome of a sync run.

    Either DELIVERED with no error, or FAILED carrying the error and the
    last stage that completed before it.
    """
    run_id: str
    stage: SyncStage
    records: int = 0
    failed_after: Optional[SyncStage] = None
    error: Optional[ApplicationException] = None

    def __post_init__(self):
        """Validate result consistency."""
        if not self.stage.is_terminal:
            raise ValueError(f"SyncResult stage must be terminal, got {self.stage.value}")
        if (self.stage == SyncStage.FAILED) != (self.error is not None):
            raise ValueError("A failed result must carry an error, a delivered one must not")

    @classmethod
    def delivered(cls, run_id: str, records: int) -> "SyncResult":
        return cls(run_id=run_id, stage=SyncStage.DELIVERED, records=records)

    @classmethod
    def failed(
        cls,
        run_id: str,
        failed_after: SyncStage,
        error: ApplicationException,
        records: int = 0
    ) -> "SyncResult":
        return cls(
            run_id=run_id,
            stage=SyncStage.FAILED,
            records=records,
            failed_after=failed_after,
            error=error,
        )

    @property
    def succeeded(self) -> bool:
        return self.stage == SyncStage.DELIVERED

    @property
    def error_kind(self) -> Optional[str]:
        """Exception class name of the failure, e.g. "ApiException"."""
        return type(self.error).__name__ if self.error else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None
