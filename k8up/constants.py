"""Job types, condition types and reasons, well-known labels and the API group."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class _StrEnum(str, Enum):
    """A string enumeration whose ``str()`` is its value."""

    def __str__(self) -> str:
        return self.value


class JobType(_StrEnum):
    """What kind of job an object describes."""

    BACKUP = "backup"
    CHECK = "check"
    ARCHIVE = "archive"
    RESTORE = "restore"
    PRUNE = "prune"
    SCHEDULE = "schedule"


class ConditionType(_StrEnum):
    """The type of a status condition."""

    # The resource has completed its main function.
    COMPLETED = "Completed"
    # All preconditions are met.
    READY = "Ready"
    # Outdated, similar resources have been cleaned up.
    SCRUBBED = "Scrubbed"
    # The resource is doing its main function.
    PROGRESSING = "Progressing"
    # Deployments for all pre-backup pod definitions were created and are ready.
    PRE_BACKUP_POD_READY = "PreBackupPodReady"


class ConditionReason(_StrEnum):
    """The programmatic cause of a status condition."""

    READY = "Ready"
    STARTED = "Started"
    FINISHED = "Finished"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CREATION_FAILED = "CreationFailed"
    UPDATE_FAILED = "UpdateFailed"
    DELETION_FAILED = "DeletionFailed"
    RETRIEVAL_FAILED = "RetrievalFailed"
    NO_PRE_BACKUP_PODS_FOUND = "NoPreBackupPodsFound"
    WAITING = "Waiting"


LABEL_K8UP_TYPE = "k8up.io/type"
LABEL_K8UP_OWNED_BY = "k8up.io/owned-by"
# Former label key that identified the job type; deprecated.
LEGACY_LABEL_K8UP_TYPE = "k8up.syn.tools/type"
LABEL_MANAGED_BY = "app.kubernetes.io/managed-by"
LABEL_REPOSITORY_HASH = "k8up.io/repository-hash"

# Set on RWO claims to try to back them up on the named node.
ANNOTATION_K8UP_HOSTNAME = "k8up.io/hostname"


@dataclass(frozen=True)
class NamespacedName:
    """A name together with the namespace it lives in."""

    name: str = ""
    namespace: str = ""


@dataclass(frozen=True)
class GroupVersion:
    """An API group and version."""

    group: str
    version: str


GROUP_VERSION = GroupVersion(group="k8up.io", version="v1")


def map_to_namespaced_name(obj: Any) -> NamespacedName:
    """Return the name and namespace of an object or of its ``metadata``."""
    meta = getattr(obj, "metadata", obj)
    return NamespacedName(
        name=getattr(meta, "name", "") or "",
        namespace=getattr(meta, "namespace", "") or "",
    )