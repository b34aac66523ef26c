"""Settings for creating a restore from the command line."""

from __future__ import annotations

import random
from dataclasses import dataclass

_CHARACTERS = "abcdefghijklmnopqrstuvwxyz1234567890"


def random_string(n: int) -> str:
    """Return ``n`` random lower-case letters and digits."""
    if n < 0:
        raise ValueError("length must not be negative")
    return "".join(random.choices(_CHARACTERS, k=n))


@dataclass
class RestoreConfig:
    """What a restore object is built from; comments name the field each fills."""

    # spec.restoreMethod.folder.claimName
    claim_name: str = ""
    kubeconfig: str = ""
    namespace: str = ""
    # metadata.name
    restore_name: str = ""
    # spec.podSecurityContext.runAsUser
    run_as_user: int = 0
    # one of the restore methods: s3 or pvc
    restore_method: str = ""
    # spec.snapshot
    snapshot: str = ""
    # spec.backend.repoPasswordSecretRef.name
    secret_ref: str = ""
    # spec.backend.repoPasswordSecretRef.key
    secret_ref_key: str = ""

    # spec.backend.s3.endpoint
    s3_endpoint: str = ""
    # spec.backend.s3.bucket
    s3_bucket: str = ""
    # spec.backend.s3 access key and secret key secret name
    s3_secret_ref: str = ""
    # spec.backend.s3.accessKeyIDSecretRef.key
    s3_secret_ref_username_key: str = ""
    # spec.backend.s3.secretAccessKeySecretRef.key
    s3_secret_ref_password_key: str = ""

    # spec.restoreMethod.s3.endpoint
    restore_to_s3_endpoint: str = ""
    # spec.restoreMethod.s3.bucket
    restore_to_s3_bucket: str = ""
    # spec.restoreMethod.s3 access key and secret key secret name
    restore_to_s3_secret: str = ""
    # spec.restoreMethod.s3.accessKeyIDSecretRef key
    restore_to_s3_secret_username_key: str = ""
    # spec.restoreMethod.s3.secretAccessKeySecretRef key
    restore_to_s3_secret_password_key: str = ""