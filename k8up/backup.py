"""Backup, check and prune jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from k8up.constants import JobType
from k8up.objects import JobObject, RunnableSpec


@dataclass
class Env:
    """A single environment variable."""

    key: str = ""
    value: str = ""


@dataclass
class BackupTemplate:
    """Settings that backups created from a template share."""

    tags: Optional[list[str]] = None
    backend: Any = None
    env: Env = field(default_factory=Env)


@dataclass
class BackupSpec(RunnableSpec):
    """A single backup; it holds everything needed to reach the repository.

    ``keep_jobs`` is deprecated in favour of the two history limits.
    ``label_selectors`` restricts the claims and pre-backup pods backed up.
    """

    keep_jobs: Optional[int] = None
    failed_jobs_history_limit: Optional[int] = None
    successful_jobs_history_limit: Optional[int] = None
    prom_url: str = ""
    stats_url: str = ""
    tags: list[str] = field(default_factory=list)
    label_selectors: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class Backup(JobObject):
    """A backup job."""

    job_type = JobType.BACKUP
    kind = "Backup"

    spec: BackupSpec = field(default_factory=BackupSpec)

    def get_type(self) -> JobType:
        return JobType.BACKUP


@dataclass
class BackupList:
    """A list of backups."""

    items: list[Backup] = field(default_factory=list)

    def get_job_objects(self) -> list[JobObject]:
        """Return the backups as job objects, in list order."""
        return list(self.items)


@dataclass
class CheckSpec(RunnableSpec):
    """Desired state of a repository check."""

    prom_url: str = ""
    keep_jobs: Optional[int] = None
    failed_jobs_history_limit: Optional[int] = None
    successful_jobs_history_limit: Optional[int] = None


@dataclass
class Check(JobObject):
    """A repository check job."""

    job_type = JobType.CHECK
    kind = "Check"

    spec: CheckSpec = field(default_factory=CheckSpec)

    def get_type(self) -> JobType:
        return JobType.CHECK


@dataclass
class CheckList:
    """A list of checks."""

    items: list[Check] = field(default_factory=list)

    def get_job_objects(self) -> list[JobObject]:
        """Return the checks as job objects, in list order."""
        return list(self.items)


@dataclass
class RetentionPolicy:
    """How many snapshots to keep after a forget and prune.

    ``tags`` and ``hostnames`` filter which snapshots the policy applies to;
    ``keep_tags`` keeps snapshots carrying those tags.
    """

    keep_last: int = 0
    keep_hourly: int = 0
    keep_daily: int = 0
    keep_weekly: int = 0
    keep_monthly: int = 0
    keep_yearly: int = 0
    keep_tags: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    hostnames: list[str] = field(default_factory=list)


@dataclass
class PruneSpec(RunnableSpec):
    """Repository information and the retention policy of a prune."""

    retention: RetentionPolicy = field(default_factory=RetentionPolicy)
    keep_jobs: Optional[int] = None
    failed_jobs_history_limit: Optional[int] = None
    successful_jobs_history_limit: Optional[int] = None


@dataclass
class Prune(JobObject):
    """A prune job."""

    job_type = JobType.PRUNE
    kind = "Prune"

    spec: PruneSpec = field(default_factory=PruneSpec)

    def get_type(self) -> JobType:
        return JobType.PRUNE


@dataclass
class PruneList:
    """A list of prunes."""

    items: list[Prune] = field(default_factory=list)

    def get_job_objects(self) -> list[JobObject]:
        """Return the prunes as job objects, in list order."""
        return list(self.items)