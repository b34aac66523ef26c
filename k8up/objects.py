"""Object metadata, runnable specs and the common behaviour of job objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Iterable, Optional, Protocol

from k8up.constants import JobType
from k8up.status import Status


class NotFoundError(LookupError):
    """Raised by a client when the requested object does not exist."""


class Client(Protocol):
    """Reads objects from the cluster by kind, name and namespace."""

    def get(self, kind: type, name: str, namespace: str) -> Any:
        """Return the object, or raise NotFoundError."""
        ...


@dataclass
class ObjectMeta:
    """Identity and bookkeeping data of an object."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    creation_timestamp: Optional[datetime] = None


@dataclass
class RunnableVolumeSpec:
    """A volume that containers of the job's pod can mount."""

    name: str
    persistent_volume_claim: Optional[dict[str, Any]] = None
    secret: Optional[dict[str, Any]] = None
    config_map: Optional[dict[str, Any]] = None


@dataclass
class RunnableSpec:
    """Fields shared by the specs of every action that becomes a job.

    ``pod_config_ref`` is the name of a PodConfig in the same namespace; it
    takes precedence over ``resources`` and ``pod_security_context``.
    """

    backend: Any = None
    resources: dict[str, Any] = field(default_factory=dict)
    pod_security_context: Optional[dict[str, Any]] = None
    pod_config_ref: Optional[str] = None
    volumes: Optional[list[RunnableVolumeSpec]] = None
    active_deadline_seconds: Optional[int] = None

    def append_env_from_to_container(self, container: Any) -> None:
        """Add the backend's ``env_from`` sources to the container's ``env_from``."""
        if self.backend is not None:
            container.env_from.extend(self.backend.env_from)


@dataclass
class PodConfigSpec:
    """Holds the pod template applied to job pods."""

    template: dict[str, Any] = field(default_factory=dict)


@dataclass
class PodConfig:
    """A pod template; its labels and annotations also land on the final pod."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodConfigSpec = field(default_factory=PodConfigSpec)


@dataclass
class PreBackupPodSpec:
    """A pod launched during a backup and removed again afterwards."""

    backup_command: str = ""
    file_extension: str = ""
    pod: Optional[dict[str, Any]] = None


@dataclass
class PreBackupPod:
    """A pre-backup pod definition."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PreBackupPodSpec = field(default_factory=PreBackupPodSpec)


@dataclass
class SnapshotSpec:
    """What is needed to know about a restic snapshot to restore it."""

    id: Optional[str] = None
    date: Optional[datetime] = None
    paths: Optional[list[str]] = None
    repository: Optional[str] = None


@dataclass
class Snapshot:
    """A restic snapshot."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SnapshotSpec = field(default_factory=SnapshotSpec)


def new_pod_config(client: Client, name: str, namespace: str) -> Optional[PodConfig]:
    """Fetch a PodConfig; return None if it does not exist."""
    try:
        return client.get(PodConfig, name, namespace)
    except NotFoundError:
        return None


@dataclass
class JobObject:
    """Common behaviour of every object that runs as a job.

    Subclasses set ``job_type`` and ``kind`` and add a ``spec`` field.
    """

    job_type: ClassVar[JobType]
    kind: ClassVar[str]

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    status: Status = field(default_factory=Status)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def get_type(self) -> JobType:
        """Return the kind of job this object describes."""
        return type(self).job_type

    def get_failed_jobs_history_limit(self) -> Optional[int]:
        """Failed jobs to keep; falls back to the deprecated keep_jobs."""
        spec = self.spec  # type: ignore[attr-defined]
        if spec.failed_jobs_history_limit is not None:
            return spec.failed_jobs_history_limit
        return spec.keep_jobs

    def get_successful_jobs_history_limit(self) -> Optional[int]:
        """Successful jobs to keep; falls back to the deprecated keep_jobs."""
        spec = self.spec  # type: ignore[attr-defined]
        if spec.successful_jobs_history_limit is not None:
            return spec.successful_jobs_history_limit
        return spec.keep_jobs

    def get_pod_config(self, client: Client) -> Optional[PodConfig]:
        """Return the referenced PodConfig, or None if none is referenced or found."""
        ref = self.spec.pod_config_ref  # type: ignore[attr-defined]
        if ref is None:
            return None
        return new_pod_config(client, ref, self.metadata.namespace)


def job_object_sort_key(obj: JobObject) -> tuple[bool, float, str]:
    """Order by creation time, then by name; objects without a time come first."""
    ts = obj.metadata.creation_timestamp
    return (ts is not None, ts.timestamp() if ts is not None else 0.0, obj.metadata.name)


def sort_job_objects(objects: Iterable[JobObject]) -> list[JobObject]:
    """Return the objects oldest first, ties broken by name."""
    return sorted(objects, key=job_object_sort_key)