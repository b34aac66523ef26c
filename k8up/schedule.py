"""Schedules that create jobs at regular intervals."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from k8up.backup import BackupSpec, CheckSpec, PruneSpec
from k8up.constants import JobType
from k8up.objects import Client, ObjectMeta, PodConfig, RunnableSpec, new_pod_config
from k8up.restore import ArchiveSpec, RestoreSpec
from k8up.status import Condition, Status

# Finalizer on resources whose cron schedules need cleanup before deletion.
SCHEDULE_FINALIZER_NAME = "k8up.io/schedule"
# Deprecated; migrate to SCHEDULE_FINALIZER_NAME.
LEGACY_SCHEDULE_FINALIZER_NAME = "k8up.syn.tools/schedule"


class ScheduleDefinition(str):
    """A cron expression, or a special definition such as ``@daily-random``."""

    def is_non_standard(self) -> bool:
        """True if the definition begins with ``@``."""
        return self.startswith("@")

    def is_random(self) -> bool:
        """True for a non-standard definition ending in ``-random``."""
        return self.is_non_standard() and self.endswith("-random")


@dataclass
class ScheduleCommon:
    """Fields every schedule needs."""

    schedule: ScheduleDefinition = ScheduleDefinition("")
    concurrent_runs_allowed: bool = False

    def __post_init__(self) -> None:
        self.schedule = ScheduleDefinition(self.schedule)

    def get_deep_copy(self) -> Any:
        """Return an independent copy of this schedule."""
        return copy.deepcopy(self)

    def get_runnable_spec(self) -> RunnableSpec:
        """Return the runnable part of this schedule."""
        return self  # type: ignore[return-value]

    def get_schedule(self) -> ScheduleDefinition:
        """Return the schedule definition."""
        return self.schedule


@dataclass
class RestoreSchedule(RestoreSpec, ScheduleCommon):
    """Schedule for restores."""


@dataclass
class BackupSchedule(BackupSpec, ScheduleCommon):
    """Schedule for backups."""


@dataclass
class ArchiveSchedule(ArchiveSpec, ScheduleCommon):
    """Schedule for archives."""


@dataclass
class CheckSchedule(CheckSpec, ScheduleCommon):
    """Schedule for checks."""


@dataclass
class PruneSchedule(PruneSpec, ScheduleCommon):
    """Schedule for prunes."""


@dataclass
class ScheduleSpec:
    """The schedules for the various job types and their shared defaults.

    ``keep_jobs`` is deprecated in favour of the two history limits.
    ``pod_config_ref`` applies to every job unless a job overrides it.
    """

    restore: Optional[RestoreSchedule] = None
    backup: Optional[BackupSchedule] = None
    archive: Optional[ArchiveSchedule] = None
    check: Optional[CheckSchedule] = None
    prune: Optional[PruneSchedule] = None
    backend: Any = None
    keep_jobs: Optional[int] = None
    failed_jobs_history_limit: Optional[int] = None
    successful_jobs_history_limit: Optional[int] = None
    resource_requirements_template: dict[str, Any] = field(default_factory=dict)
    pod_security_context: Optional[dict[str, Any]] = None
    pod_config_ref: Optional[str] = None


@dataclass
class EffectiveSchedule:
    """A schedule generated from a randomized definition."""

    job_type: JobType = JobType.SCHEDULE
    generated_schedule: ScheduleDefinition = ScheduleDefinition("")

    def __post_init__(self) -> None:
        self.generated_schedule = ScheduleDefinition(self.generated_schedule)


@dataclass
class ScheduleStatus:
    """Observed state of a schedule."""

    conditions: list[Condition] = field(default_factory=list)
    effective_schedules: list[EffectiveSchedule] = field(default_factory=list)


@dataclass
class Schedule:
    """A set of schedules in one namespace."""

    kind = "Schedule"

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ScheduleSpec = field(default_factory=ScheduleSpec)
    status: ScheduleStatus = field(default_factory=ScheduleStatus)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def get_job_name(self) -> str:
        """Return the type followed by a dash and the name."""
        return f"{self.get_type()}-{self.metadata.name}"

    def get_type(self) -> JobType:
        return JobType.SCHEDULE

    def get_status(self) -> Status:
        """Return a Status sharing this schedule's conditions."""
        return Status(conditions=self.status.conditions)

    def set_status(self, status: Status) -> None:
        """Take over the conditions of the given status."""
        self.status.conditions = status.conditions

    def get_resources(self) -> dict[str, Any]:
        return self.spec.resource_requirements_template

    def get_pod_security_context(self) -> Optional[dict[str, Any]]:
        return self.spec.pod_security_context

    def get_active_deadline_seconds(self) -> Optional[int]:
        """Schedules have no deadline."""
        return None

    def get_failed_jobs_history_limit(self) -> Optional[int]:
        """Failed jobs to keep; falls back to the deprecated keep_jobs."""
        if self.spec.failed_jobs_history_limit is not None:
            return self.spec.failed_jobs_history_limit
        return self.spec.keep_jobs

    def get_successful_jobs_history_limit(self) -> Optional[int]:
        """Successful jobs to keep; falls back to the deprecated keep_jobs."""
        if self.spec.successful_jobs_history_limit is not None:
            return self.spec.successful_jobs_history_limit
        return self.spec.keep_jobs

    def get_pod_config(self, client: Client) -> Optional[PodConfig]:
        """Return the referenced PodConfig, or None if none is referenced or found."""
        if self.spec.pod_config_ref is None:
            return None
        return new_pod_config(client, self.spec.pod_config_ref, self.metadata.namespace)


@dataclass
class ScheduleList:
    """A list of schedules."""

    items: list[Schedule] = field(default_factory=list)