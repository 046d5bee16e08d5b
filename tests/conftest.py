import base64
import json

import jwt
import pytest

from pkg_kubeauth.application.use_cases.registry import IdentityRegistry
from pkg_kubeauth.domain.exceptions import InputError, ResourceError


SIGNING_KEY = "unit-test-signing-key-that-is-long-enough-for-hs256"

SAMPLE_CLAIMS = {
    "aud": ["https://kubernetes.default.svc.cluster.local"],
    "exp": 1725391365,
    "iat": 1693855365,
    "iss": "https://kubernetes.default.svc.cluster.local",
    "kubernetes.io": {
        "namespace": "default",
        "pod": {"name": "web", "uid": "a1b2"},
        "serviceaccount": {"name": "default", "uid": "c3d4"},
        "warnafter": 1693858972,
    },
    "nbf": 1693855365,
    "sub": "system:serviceaccount:default:default",
}


def b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def raw_token(payload, header=None, signature="c2ln") -> str:
    """Hand-built compact token; payload may be a dict or a raw segment."""
    header_seg = b64url(json.dumps(header or {"alg": "RS256", "typ": "JWT"}).encode())
    if isinstance(payload, str):
        payload_seg = payload
    else:
        payload_seg = b64url(json.dumps(payload).encode())
    return f"{header_seg}.{payload_seg}.{signature}"


@pytest.fixture
def make_token():
    def _make(claims) -> str:
        return jwt.encode(claims, SIGNING_KEY, algorithm="HS256")
    return _make


@pytest.fixture
def sample_token(make_token):
    return make_token(SAMPLE_CLAIMS)


@pytest.fixture
def registry():
    return IdentityRegistry()


class FakeCAWriter:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.written = []

    def write(self, ca_certificate_data: str) -> str:
        if self.fail:
            raise ResourceError("no space left on device")
        self.written.append(ca_certificate_data)
        return f"/tmp/fake-{len(self.written)}-ca.crt"


class ScriptedReader:
    """LineReader returning queued lines, then failing like a closed stdin."""

    def __init__(self, *lines: str):
        self.lines = list(lines)

    def read_line(self) -> str:
        if not self.lines:
            raise InputError("Unexpected end of input")
        return self.lines.pop(0).strip()


class RecordingOutput:
    def __init__(self):
        self.blocks = []
        self.file_writes = []

    def emit(self, text, to_file=False, file_name=None):
        self.blocks.append(text)
        if to_file:
            self.file_writes.append((file_name, text))

    @property
    def text(self) -> str:
        return "\n".join(self.blocks)


@pytest.fixture
def ca_writer():
    return FakeCAWriter()


@pytest.fixture
def output():
    return RecordingOutput()
