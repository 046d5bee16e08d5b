# tests/test_settings.py
from pkg_kubeauth.settings import KubeAuthSettings, settings_from_env


_KEYS = (
    "KUBEAUTH_VERBOSE",
    "KUBEAUTH_LOG_TO_FILE",
    "KUBEAUTH_OUTPUT_FILE",
    "KUBEAUTH_CA_DIR",
    "KUBEAUTH_DEFAULT_NAMESPACE",
)


def test_defaults(monkeypatch):
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)

    assert settings_from_env() == KubeAuthSettings()


def test_from_env(monkeypatch):
    monkeypatch.setenv("KUBEAUTH_VERBOSE", "yes")
    monkeypatch.setenv("KUBEAUTH_LOG_TO_FILE", "1")
    monkeypatch.setenv("KUBEAUTH_OUTPUT_FILE", " /var/log/kubeauth.log ")
    monkeypatch.setenv("KUBEAUTH_CA_DIR", "/run/kubeauth")
    monkeypatch.setenv("KUBEAUTH_DEFAULT_NAMESPACE", "")

    settings = settings_from_env()

    assert settings.verbose is True
    assert settings.log_to_file is True
    assert settings.output_file == "/var/log/kubeauth.log"
    assert settings.ca_dir == "/run/kubeauth"
    assert settings.default_namespace == "default"


def test_false_values(monkeypatch):
    monkeypatch.setenv("KUBEAUTH_VERBOSE", "off")
    assert settings_from_env().verbose is False
