# tests/test_session.py
import threading

from conftest import FakeCAWriter, ScriptedReader
from pkg_kubeauth.adapters.files.ca_writer import TempCAFileWriter
from pkg_kubeauth.application.use_cases.bind import ConnectionBinder
from pkg_kubeauth.application.use_cases.registry import IdentityRegistry
from pkg_kubeauth.domain.constants import CredentialKind
from pkg_kubeauth.domain.entities import ConnectionContext
from pkg_kubeauth.integrations.common.session import CredentialSession, create_session
from pkg_kubeauth.settings import KubeAuthSettings


def _session():
    return CredentialSession(
        registry=IdentityRegistry(),
        context=ConnectionContext(),
        binder=ConnectionBinder(ca_writer=FakeCAWriter()),
    )


def test_create_session_wires_settings(tmp_path):
    settings = KubeAuthSettings(ca_dir=str(tmp_path), default_namespace="apps")
    session = create_session(settings)

    assert session.context.namespace == "apps"
    assert isinstance(session.binder.ca_writer, TempCAFileWriter)

    pair = session.add_certificate_identity("admin", "C", "K", "https://api:6443", "CA")
    session.bind(pair)
    assert session.context.ca_path.startswith(str(tmp_path))


def test_create_session_keeps_callers_context():
    ctx = ConnectionContext(api_server="https://kubernetes.default.svc")
    assert create_session(context=ctx).context is ctx


def test_session_add_list_and_switch(output):
    session = _session()
    assert session.add_identity("default", "t1", "user input") is True
    assert session.add_identity(" default ", "t2", "user input") is False
    session.add_certificate_identity("admin", "C", "K", "https://api:6443", "CA")

    session.switch_identity(ScriptedReader("0"), output)
    assert session.list_identities() == ["> [0] default", "  [1] admin (client certificate)"]

    session.switch_identity(ScriptedReader("1"), output)
    assert session.context.kind is CredentialKind.CLIENT_CERTIFICATE
    # certificate identities are never marked active in the listing
    assert session.list_identities() == ["  [0] default", "  [1] admin (client certificate)"]


def test_session_prompt_for_token(output):
    session = _session()
    assert session.prompt_for_token(ScriptedReader("eyJ.a.b", "pasted"), output) is True
    assert session.registry[0].name == "pasted"


def test_session_import_secret():
    session = _session()
    secret = {
        "metadata": {"name": "builder-token"},
        "type": "kubernetes.io/service-account-token",
        "data": {"token": "YWJjMTIz"},
    }
    assert session.import_secret(secret) is True
    assert session.registry.find("builder-token").token == "abc123"


def test_session_import_secret_from_cluster(output):
    class Runner:
        def run(self, context, *args):
            return b'{"type": "kubernetes.io/service-account-token", "data": {"token": "YWJjMTIz"}}', None

    session = _session()
    assert session.import_secret_from_cluster(Runner(), ScriptedReader("sa-token"), output) is True
    assert session.registry[0].name == "sa-token"


def test_concurrent_binds_keep_kinds_exclusive():
    session = _session()
    session.add_identity("default", "t1", "user input")
    pair = session.add_certificate_identity("admin", "C", "K", "https://api:6443", "CA")
    account = session.registry[0]
    errors = []

    def worker(identity):
        for _ in range(200):
            session.bind(identity)
            # one read of the slot; other threads keep rebinding
            ctx = ConnectionContext(credential=session.context.credential)
            token_side = bool(ctx.token_name or ctx.token)
            cert_side = bool(ctx.client_cert_name or ctx.client_cert_data or ctx.client_key_data)
            if token_side == cert_side:
                errors.append((token_side, cert_side))

    threads = [threading.Thread(target=worker, args=(i,)) for i in (account, pair, account, pair)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []


def test_concurrent_adds_never_duplicate():
    session = _session()
    results = []

    def worker():
        results.append(session.add_identity("shared", "tok", "user input"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len(session.registry) == 1


def test_default_namespace_only_seeds_the_context(tmp_path):
    session = create_session(KubeAuthSettings(ca_dir=str(tmp_path), default_namespace="apps"))
    assert session.context.namespace == "apps"

    session.add_identity("builder", "t1", "user input")
    session.bind(session.registry[0])
    assert session.context.namespace == "apps"

    pair = session.add_certificate_identity("admin", "C", "K", "https://api:6443", "CA")
    session.bind(pair)
    assert session.context.namespace == "default"
