# k8up

A Python data model and helpers for the custom resources of a Kubernetes
backup operator: backups, restores, archives, checks, prunes and the
schedules that create them. It has no dependencies beyond the standard
library.

## Modules

- `k8up.constants`
  - The enumerations `JobType`, `ConditionType` and `ConditionReason`. Each
    one's `str()` is its value, for example `str(JobType.BACKUP) == "backup"`.
  - The label and annotation keys `LABEL_K8UP_TYPE`, `LABEL_K8UP_OWNED_BY`,
    `LEGACY_LABEL_K8UP_TYPE`, `LABEL_MANAGED_BY`, `LABEL_REPOSITORY_HASH`
    and `ANNOTATION_K8UP_HOSTNAME`.
  - `GroupVersion` and `GROUP_VERSION`, which is `k8up.io` / `v1`.
  - `NamespacedName` and `map_to_namespaced_name(obj)`. The function reads
    the name and namespace from `obj.metadata`, or from `obj` itself when
    it has no `metadata`.
- `k8up.status`
  - `ConditionStatus` (`TRUE`, `FALSE`, `UNKNOWN`) and the `Condition`
    dataclass.
  - `find_status_condition`, `set_status_condition` and
    `remove_status_condition` for plain lists of conditions.
    `set_status_condition` changes the transition time only when the
    status itself changes.
  - `Status`, which holds the deprecated `started` and `finished` flags,
    `exclusive` and a list of conditions. It has the setters
    `set_started`, `set_finished`, `set_failed`, `set_succeeded` and
    `set_condition`, and the queries `has_failed`, `has_succeeded`,
    `has_finished`, `has_failed_pre_backup`, `has_started` and
    `is_waiting_for_pre_backup`.
- `k8up.targz`
  - `TarGzipWriter` writes a `tar.gz` stream to any binary file-like
    object. Call `write_header(tarinfo)` to start each file and
    `write(data)` to add its content. `close()` finishes the archive and
    leaves the underlying object open. A second call to `close()` does
    nothing. A write after closing raises `ValueError`. The writer also
    works as a context manager.
- `k8up.objects`
  - `ObjectMeta`, `RunnableSpec` (with `append_env_from_to_container`),
    `RunnableVolumeSpec`, `PodConfig`, `PreBackupPod` and `Snapshot`,
    each with its spec.
  - The `JobObject` base class provides `get_type`, `get_pod_config` and
    the history limits. `get_failed_jobs_history_limit` and
    `get_successful_jobs_history_limit` fall back to the deprecated
    `keep_jobs`.
  - `new_pod_config(client, name, namespace)` returns `None` when the
    client raises `NotFoundError`.
  - `sort_job_objects` sorts by creation time and then by name. Objects
    without a creation time come first.
- `k8up.restore` defines `Restore`, `Archive` and their specs and lists,
  along with `RestoreMethod` and `FolderRestore`.
- `k8up.backup` defines `Backup`, `Check` and `Prune` and their specs and
  lists, along with `RetentionPolicy`, `BackupTemplate` and `Env`.
- `k8up.schedule`
  - `ScheduleDefinition` is a `str` with two methods. `is_non_standard()`
    is true when the definition starts with `@`. `is_random()` is true when
    it is non-standard and ends with `-random`.
  - `ScheduleCommon` and the per-job schedules `RestoreSchedule`,
    `BackupSchedule`, `ArchiveSchedule`, `CheckSchedule` and
    `PruneSchedule`.
  - `Schedule`, with its spec, status and list, and the finalizer names
    `SCHEDULE_FINALIZER_NAME` and `LEGACY_SCHEDULE_FINALIZER_NAME`.
- `k8up.restore_config` defines the `RestoreConfig` dataclass and
  `random_string(n)`. `random_string` returns `n` random lower-case
  letters and digits.

## Examples

Tracking a job's status:

```python
from k8up.status import Status

status = Status()
status.set_started("the job has started")
status.set_succeeded("the job is done")
assert status.has_succeeded()
assert status.has_finished()
```

History limits and ordering:

```python
from datetime import datetime, timezone

from k8up.backup import Backup, BackupSpec
from k8up.objects import ObjectMeta, sort_job_objects

old = Backup(
    metadata=ObjectMeta(name="b", creation_timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc)),
    spec=BackupSpec(keep_jobs=3),
)
new = Backup(
    metadata=ObjectMeta(name="a", creation_timestamp=datetime(2024, 2, 1, tzinfo=timezone.utc)),
)
assert old.get_failed_jobs_history_limit() == 3
assert [b.name for b in sort_job_objects([new, old])] == ["b", "a"]
```

Writing an archive:

```python
import io
import tarfile

from k8up.targz import TarGzipWriter

buffer = io.BytesIO()
with TarGzipWriter(buffer) as archive:
    info = tarfile.TarInfo("hello.txt")
    info.size = 5
    archive.write_header(info)
    archive.write(b"hello")
```

## What this package does not do

This package describes resources and their status. It does not act on them.

- It has no command line.
- It runs no operator or controllers, and it creates no jobs.
- It does not call restic.
- It does not talk to a cluster. To use `get_pod_config` and
  `new_pod_config`, supply a client object whose
  `get(kind, name, namespace)` returns the object or raises
  `k8up.objects.NotFoundError`.
- Backend settings (`backend`) are held as given. No repository strings or
  credential variables are derived from them.

## Installing for development

```
pip install -e ".[test]"
pytest
```