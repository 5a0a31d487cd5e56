import pytest
import yaml

from kubex.exceptions import ConfigLoadError, PersistError
from kubex.models import KubeConfig
from kubex.storage.kubeconfig_storage import KubeconfigStorage

KUBECONFIG = {
    "apiVersion": "v1",
    "kind": "Config",
    "preferences": {"colors": True},
    "clusters": [
        {"name": "prod", "cluster": {"server": "https://prod.example.com"}},
        {"name": "kind", "cluster": {"server": "https://127.0.0.1:6443"}},
    ],
    "users": [{"name": "admin", "user": {"token": "secret"}}],
    "contexts": [
        {"name": "production-cluster",
         "context": {"cluster": "prod", "user": "admin", "namespace": "web"}},
        {"name": "kind-dev", "context": {"cluster": "kind", "user": "admin"}},
    ],
    "current-context": "kind-dev",
    "extensions": [{"name": "vendor", "extension": {"x-custom": 1}}],
}


@pytest.fixture
def kubeconfig_file(tmp_path):
    path = tmp_path / "config"
    path.write_text(yaml.safe_dump(KUBECONFIG, sort_keys=False))
    return path


def test_load(kubeconfig_file):
    """Contexts are exposed by name, current-context verbatim"""
    config = KubeconfigStorage(kubeconfig_file).load()
    assert list(config.contexts) == ["production-cluster", "kind-dev"]
    assert config.contexts["production-cluster"]["namespace"] == "web"
    assert config.current_context == "kind-dev"


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError):
        KubeconfigStorage(tmp_path / "nope").load()


def test_load_invalid_yaml(tmp_path):
    path = tmp_path / "config"
    path.write_text("contexts: [\n")
    with pytest.raises(ConfigLoadError):
        KubeconfigStorage(path).load()


def test_load_non_mapping(tmp_path):
    path = tmp_path / "config"
    path.write_text("- a\n- b\n")
    with pytest.raises(ConfigLoadError):
        KubeconfigStorage(path).load()


def test_load_empty_file(tmp_path):
    """An empty kubeconfig has no contexts and no current context"""
    path = tmp_path / "config"
    path.write_text("")
    config = KubeconfigStorage(path).load()
    assert config.contexts == {}
    assert config.current_context == ""


def test_save_preserves_unknown_fields(kubeconfig_file):
    """Only current-context changes on rewrite"""
    storage = KubeconfigStorage(kubeconfig_file)
    config = storage.load()
    config.current_context = "production-cluster"
    storage.save(config)

    written = yaml.safe_load(kubeconfig_file.read_text())
    expected = dict(KUBECONFIG, **{"current-context": "production-cluster"})
    assert written == expected
    assert list(written) == list(KUBECONFIG)


def test_save_failure(tmp_path):
    storage = KubeconfigStorage(tmp_path / "missing-dir" / "config")
    with pytest.raises(PersistError):
        storage.save(KubeConfig.from_dict({"contexts": []}))


def test_contexts_skip_unnamed_entries():
    config = KubeConfig.from_dict({"contexts": [{"context": {}}, {"name": "a"}, None]})
    assert config.contexts == {"a": {}}


def test_load_undecodable_file(tmp_path):
    """Invalid UTF-8 is reported as ConfigLoadError"""
    path = tmp_path / "config"
    path.write_bytes(b"current-context: \xff\n")
    with pytest.raises(ConfigLoadError):
        KubeconfigStorage(path).load()
