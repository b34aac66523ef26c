from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from k8up.constants import JobType
from k8up.objects import (
    JobObject,
    NotFoundError,
    ObjectMeta,
    PodConfig,
    RunnableSpec,
    job_object_sort_key,
    new_pod_config,
    sort_job_objects,
)


@dataclass
class _JobSpec(RunnableSpec):
    keep_jobs: object = None
    failed_jobs_history_limit: object = None
    successful_jobs_history_limit: object = None


@dataclass
class _Job(JobObject):
    job_type = JobType.CHECK
    kind = "Check"
    spec: _JobSpec = field(default_factory=_JobSpec)


class _FakeClient:
    def __init__(self, objects):
        self.objects = objects
        self.calls = []

    def get(self, kind, name, namespace):
        self.calls.append((kind, name, namespace))
        try:
            return self.objects[(name, namespace)]
        except KeyError:
            raise NotFoundError(name) from None


class _BrokenClient:
    def get(self, kind, name, namespace):
        raise PermissionError("forbidden")


def _job(name, ts=None):
    return _Job(metadata=ObjectMeta(name=name, creation_timestamp=ts))


def test_new_pod_config_found():
    config = PodConfig(metadata=ObjectMeta(name="cfg", namespace="ns"))
    client = _FakeClient({("cfg", "ns"): config})
    assert new_pod_config(client, "cfg", "ns") is config
    assert client.calls == [(PodConfig, "cfg", "ns")]


def test_new_pod_config_missing_returns_none():
    assert new_pod_config(_FakeClient({}), "cfg", "ns") is None


def test_new_pod_config_other_errors_propagate():
    with pytest.raises(PermissionError):
        new_pod_config(_BrokenClient(), "cfg", "ns")


def test_get_pod_config_without_ref():
    client = _FakeClient({})
    job = _Job(metadata=ObjectMeta(name="j", namespace="ns"))
    assert JobObject.get_pod_config(job, client) is None
    assert client.calls == []


def test_get_pod_config_uses_object_namespace():
    config = PodConfig(metadata=ObjectMeta(name="cfg", namespace="team"))
    client = _FakeClient({("cfg", "team"): config})
    job = _Job(metadata=ObjectMeta(name="j", namespace="team"), spec=_JobSpec(pod_config_ref="cfg"))
    assert job.get_pod_config(client) is config


def test_history_limits_fallback():
    job = _Job(metadata=ObjectMeta(name="j"), spec=_JobSpec(keep_jobs=3, failed_jobs_history_limit=1))
    assert JobObject.get_failed_jobs_history_limit(job) == 1
    assert JobObject.get_successful_jobs_history_limit(job) == 3


def test_get_type_and_name():
    job = _Job(metadata=ObjectMeta(name="a", namespace="b"))
    assert job.get_type() is JobType.CHECK
    assert job.name == "a"
    assert job.namespace == "b"


def test_sort_by_creation_time():
    early = _job("z", datetime(2020, 1, 1, tzinfo=timezone.utc))
    late = _job("a", datetime(2021, 1, 1, tzinfo=timezone.utc))
    assert sort_job_objects([late, early]) == [early, late]


def test_sort_ties_broken_by_name():
    ts = datetime(2020, 1, 1, tzinfo=timezone.utc)
    b, a, c = _job("b", ts), _job("a", ts), _job("c", ts)
    assert [j.name for j in sort_job_objects([b, c, a])] == ["a", "b", "c"]


def test_sort_key_orders_missing_time_first():
    ts = datetime(2020, 1, 1, tzinfo=timezone.utc)
    assert job_object_sort_key(_job("z")) < job_object_sort_key(_job("a", ts))


def test_append_env_from_to_container():
    source = {"prefix": "test-prefix", "secretRef": {"name": "my-secret"}}
    spec = RunnableSpec(backend=SimpleNamespace(env_from=[source]))
    container = SimpleNamespace(env_from=[])
    spec.append_env_from_to_container(container)
    assert container.env_from[0]["prefix"] == "test-prefix"
    assert container.env_from[0]["secretRef"]["name"] == "my-secret"


def test_append_env_from_without_backend():
    container = SimpleNamespace(env_from=["existing"])
    RunnableSpec().append_env_from_to_container(container)
    assert container.env_from == ["existing"]