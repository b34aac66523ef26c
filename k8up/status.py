"""Status conditions of jobs and the rules that read them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from k8up.constants import ConditionReason, ConditionType


class ConditionStatus(str, Enum):
    """Whether a condition holds."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class Condition:
    """One observed condition of a resource."""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    observed_generation: int = 0
    last_transition_time: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.type = str(self.type)
        self.reason = str(self.reason)
        self.status = ConditionStatus(self.status)


def find_status_condition(
    conditions: list[Condition], condition_type: str
) -> Optional[Condition]:
    """Return the condition of the given type, or None."""
    wanted = str(condition_type)
    return next((c for c in conditions if c.type == wanted), None)


def set_status_condition(conditions: list[Condition], condition: Condition) -> bool:
    """Add or update a condition by type; return whether anything changed.

    The transition time only moves when the status changes.
    """
    existing = find_status_condition(conditions, condition.type)
    if existing is None:
        new = dataclasses.replace(condition)
        if new.last_transition_time is None:
            new.last_transition_time = _now()
        conditions.append(new)
        return True

    changed = False
    if existing.status != condition.status:
        existing.status = condition.status
        existing.last_transition_time = condition.last_transition_time or _now()
        changed = True
    if existing.reason != condition.reason:
        existing.reason = condition.reason
        changed = True
    if existing.message != condition.message:
        existing.message = condition.message
        changed = True
    if existing.observed_generation != condition.observed_generation:
        existing.observed_generation = condition.observed_generation
        changed = True
    return changed


def remove_status_condition(conditions: list[Condition], condition_type: str) -> bool:
    """Remove every condition of the given type; return whether one was removed."""
    wanted = str(condition_type)
    kept = [c for c in conditions if c.type != wanted]
    removed = len(kept) != len(conditions)
    conditions[:] = kept
    return removed


def _match_any_reason(condition: Condition, *reasons: ConditionReason) -> bool:
    return any(condition.reason == str(reason) for reason in reasons)


def _is_pre_backup_failed(condition: Condition) -> bool:
    return not _match_any_reason(
        condition,
        ConditionReason.SUCCEEDED,
        ConditionReason.WAITING,
        ConditionReason.NO_PRE_BACKUP_PODS_FOUND,
        ConditionReason.READY,
    )


@dataclass
class Status:
    """Observed state of a job, used by the operator to decide what to do."""

    started: bool = False
    finished: bool = False
    exclusive: bool = False
    conditions: list[Condition] = field(default_factory=list)

    def has_failed(self) -> bool:
        """True if pre-backup failed, or Completed is true with a reason other than Succeeded."""
        if self.has_failed_pre_backup():
            return True
        completed = find_status_condition(self.conditions, ConditionType.COMPLETED)
        if completed is not None and not _match_any_reason(
            completed, ConditionReason.SUCCEEDED
        ):
            return completed.status == ConditionStatus.TRUE
        return False

    def has_succeeded(self) -> bool:
        """True if Completed is true with Succeeded and pre-backup has not failed."""
        if self.has_failed_pre_backup():
            return False
        completed = find_status_condition(self.conditions, ConditionType.COMPLETED)
        if completed is not None and _match_any_reason(
            completed, ConditionReason.SUCCEEDED
        ):
            return completed.status == ConditionStatus.TRUE
        return False

    def has_finished(self) -> bool:
        """True if the job has either failed or succeeded."""
        return self.has_failed() or self.has_succeeded()

    def has_failed_pre_backup(self) -> bool:
        """True if PreBackupPodReady is false with a failure reason."""
        condition = find_status_condition(
            self.conditions, ConditionType.PRE_BACKUP_POD_READY
        )
        if condition is not None and _is_pre_backup_failed(condition):
            return condition.status == ConditionStatus.FALSE
        return False

    def has_started(self) -> bool:
        """True if Progressing is true with reason Started."""
        condition = find_status_condition(self.conditions, ConditionType.PROGRESSING)
        if condition is not None and _match_any_reason(
            condition, ConditionReason.STARTED
        ):
            return condition.status == ConditionStatus.TRUE
        return False

    def is_waiting_for_pre_backup(self) -> bool:
        """True if PreBackupPodReady is unknown with reason Waiting."""
        condition = find_status_condition(
            self.conditions, ConditionType.PRE_BACKUP_POD_READY
        )
        if condition is not None and _match_any_reason(
            condition, ConditionReason.WAITING
        ):
            return condition.status == ConditionStatus.UNKNOWN
        return False

    def set_started(self, message: str) -> None:
        """Mark the job Ready and Progressing; sets the deprecated started flag."""
        self.started = True
        set_status_condition(
            self.conditions,
            Condition(
                type=ConditionType.READY,
                status=ConditionStatus.TRUE,
                reason=ConditionReason.READY,
                message=message,
            ),
        )
        set_status_condition(
            self.conditions,
            Condition(
                type=ConditionType.PROGRESSING,
                status=ConditionStatus.TRUE,
                reason=ConditionReason.STARTED,
                message="The job is progressing",
            ),
        )

    def set_finished(self, message: str) -> None:
        """Set Progressing to false with Finished and drop Ready; sets the finished flag."""
        self.finished = True
        set_status_condition(
            self.conditions,
            Condition(
                type=ConditionType.PROGRESSING,
                status=ConditionStatus.FALSE,
                reason=ConditionReason.FINISHED,
                message=message,
            ),
        )
        remove_status_condition(self.conditions, ConditionType.READY)

    def set_failed(self, message: str) -> None:
        """Set Completed to true with reason Failed."""
        self.set_condition(
            ConditionType.COMPLETED, ConditionReason.FAILED, ConditionStatus.TRUE, message
        )

    def set_succeeded(self, message: str) -> None:
        """Set Completed to true with reason Succeeded."""
        self.set_condition(
            ConditionType.COMPLETED,
            ConditionReason.SUCCEEDED,
            ConditionStatus.TRUE,
            message,
        )

    def set_condition(
        self,
        typ: ConditionType,
        reason: ConditionReason,
        status: ConditionStatus,
        message: str,
    ) -> None:
        """Set a condition, replacing an existing one of the same type."""
        set_status_condition(
            self.conditions,
            Condition(type=typ, status=status, reason=reason, message=message),
        )