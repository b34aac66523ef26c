import pytest

from k8up.constants import JobType
from k8up.objects import NotFoundError, ObjectMeta, PodConfig
from k8up.restore import (
    Archive,
    ArchiveList,
    ArchiveSpec,
    FolderRestore,
    Restore,
    RestoreList,
    RestoreMethod,
    RestoreSpec,
)


def test_jobs_history_limit():
    for limits in (
        Archive(spec=ArchiveSpec(successful_jobs_history_limit=2, failed_jobs_history_limit=1, keep_jobs=3)),
        Restore(spec=RestoreSpec(successful_jobs_history_limit=2, failed_jobs_history_limit=1, keep_jobs=3)),
    ):
        assert limits.get_failed_jobs_history_limit() == 1
        assert limits.get_successful_jobs_history_limit() == 2


def test_fallback_to_deprecated_keep_jobs():
    for limits in (
        Archive(spec=ArchiveSpec(keep_jobs=3)),
        Restore(spec=RestoreSpec(keep_jobs=3)),
    ):
        assert limits.get_failed_jobs_history_limit() == 3
        assert limits.get_successful_jobs_history_limit() == 3


def test_no_fallback_value():
    for limits in (Archive(spec=ArchiveSpec()), Restore(spec=RestoreSpec())):
        assert limits.get_failed_jobs_history_limit() is None
        assert limits.get_successful_jobs_history_limit() is None


@pytest.mark.parametrize(
    "make_list",
    [
        lambda a, b: ArchiveList(items=[Archive(metadata=ObjectMeta(name=a)), Archive(metadata=ObjectMeta(name=b))]),
        lambda a, b: RestoreList(items=[Restore(metadata=ObjectMeta(name=a)), Restore(metadata=ObjectMeta(name=b))]),
    ],
    ids=["Archive", "Restore"],
)
def test_get_job_objects(make_list):
    objects = make_list("obj1", "obj2").get_job_objects()
    assert objects[0].name == "obj1"
    assert objects[1].name == "obj2"


def test_job_objects_are_the_list_items():
    item = Restore(metadata=ObjectMeta(name="obj1"))
    restores = RestoreList(items=[item])
    assert restores.get_job_objects()[0] is item


def test_types_and_kinds():
    assert Restore().get_type() is JobType.RESTORE
    assert Archive().get_type() is JobType.ARCHIVE
    assert str(Restore().get_type()) == "restore"
    assert str(Archive().get_type()) == "archive"
    assert Restore().kind == "Restore"
    assert Archive().kind == "Archive"


def test_archive_spec_carries_restore_settings():
    spec = ArchiveSpec(
        snapshot="abc",
        restore_method=RestoreMethod(folder=FolderRestore(claim_name="claim")),
        tags=["daily"],
    )
    assert isinstance(spec, RestoreSpec)
    assert spec.restore_method.folder.claim_name == "claim"
    assert spec.tags == ["daily"]


class _Client:
    def __init__(self, objects):
        self.objects = objects

    def get(self, kind, name, namespace):
        if (name, namespace) not in self.objects:
            raise NotFoundError(name)
        return self.objects[(name, namespace)]


def test_restore_pod_config_lookup():
    config = PodConfig(metadata=ObjectMeta(name="cfg", namespace="ns"))
    client = _Client({("cfg", "ns"): config})
    restore = Restore(metadata=ObjectMeta(name="r", namespace="ns"), spec=RestoreSpec(pod_config_ref="cfg"))
    assert restore.get_pod_config(client) is config
    missing = Archive(metadata=ObjectMeta(namespace="other"), spec=ArchiveSpec(pod_config_ref="cfg"))
    assert missing.get_pod_config(client) is None


def test_status_defaults_are_independent():
    first, second = Restore(), Restore()
    first.status.set_failed("boom")
    assert first.status.has_failed()
    assert not second.status.has_failed()