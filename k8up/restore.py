"""Restore and archive jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from k8up.constants import JobType
from k8up.objects import JobObject, RunnableSpec


@dataclass
class FolderRestore:
    """Restore into an existing persistent volume claim."""

    claim_name: str = ""
    read_only: bool = False


@dataclass
class RestoreMethod:
    """How and where a restore happens; the settings exclude each other."""

    s3: Any = None
    folder: Optional[FolderRestore] = None
    tls_options: Any = None
    volume_mounts: Optional[list[dict[str, Any]]] = None


@dataclass
class RestoreSpec(RunnableSpec):
    """Restore to S3 or to a local claim.

    ``keep_jobs`` is deprecated in favour of the two history limits.
    """

    restore_method: Optional[RestoreMethod] = None
    restore_filter: str = ""
    snapshot: str = ""
    keep_jobs: Optional[int] = None
    failed_jobs_history_limit: Optional[int] = None
    successful_jobs_history_limit: Optional[int] = None
    tags: list[str] = field(default_factory=list)


@dataclass
class Restore(JobObject):
    """A restore job."""

    job_type = JobType.RESTORE
    kind = "Restore"

    spec: RestoreSpec = field(default_factory=RestoreSpec)

    def get_type(self) -> JobType:
        return JobType.RESTORE


@dataclass
class RestoreList:
    """A list of restores."""

    items: list[Restore] = field(default_factory=list)

    def get_job_objects(self) -> list[JobObject]:
        """Return the restores as job objects, in list order."""
        return list(self.items)


@dataclass
class ArchiveSpec(RestoreSpec):
    """Desired state of an archive; it takes the same settings as a restore."""


@dataclass
class Archive(JobObject):
    """An archive job."""

    job_type = JobType.ARCHIVE
    kind = "Archive"

    spec: ArchiveSpec = field(default_factory=ArchiveSpec)

    def get_type(self) -> JobType:
        return JobType.ARCHIVE


@dataclass
class ArchiveList:
    """A list of archives."""

    items: list[Archive] = field(default_factory=list)

    def get_job_objects(self) -> list[JobObject]:
        """Return the archives as job objects, in list order."""
        return list(self.items)