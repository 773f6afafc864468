import glob
import os
import tempfile

import pytest
import yaml
from kubernetes import client
from kubernetes.config import kube_config
from kubernetes.config.config_exception import ConfigException

from opencli.config import Config
from opencli.modules.dbcluster import DescribeOptions, LocatorError
from opencli.utils import kube
from opencli.utils.kube import current_namespace, load_kubeconfig


def kubeconfig(name, server, namespace=None, extra_contexts=()):
    contexts = [{"name": name, "context": {"cluster": name, "user": name}}]
    if namespace:
        contexts[0]["context"]["namespace"] = namespace
    for ctx, ns in extra_contexts:
        contexts.append({"name": ctx, "context": {"cluster": name, "user": name, "namespace": ns}})
    return {
        "apiVersion": "v1",
        "kind": "Config",
        "current-context": name,
        "clusters": [{"name": name, "cluster": {"server": server}}],
        "users": [{"name": name, "user": {"token": f"{name}-token"}}],
        "contexts": contexts,
    }


def write(path, data):
    path.write_text(yaml.safe_dump(data))
    return str(path)


def loaded_host():
    return client.Configuration.get_default_copy().host


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv("KUBECONFIG_CONTENT", raising=False)
    monkeypatch.setattr(Config, "KUBECONFIG", "")
    monkeypatch.setattr(Config, "KUBE_CONTEXT", "")
    monkeypatch.setattr(kube_config, "KUBE_CONFIG_DEFAULT_LOCATION", str(tmp_path / "missing"))
    monkeypatch.setattr(kube, "SERVICE_ACCOUNT_NAMESPACE", tmp_path / "no-service-account")
    yield
    # reset the process-wide client configuration other tests may rely on
    client.Configuration.set_default(client.Configuration())


@pytest.fixture
def incluster(monkeypatch):
    calls = []
    monkeypatch.setattr(kube.config, "load_incluster_config", lambda: calls.append(True))
    return calls


def test_content_is_loaded_in_memory(monkeypatch, tmp_path):
    explicit = write(tmp_path / "explicit.yaml", kubeconfig("file", "https://file:6443"))
    monkeypatch.setenv("KUBECONFIG_CONTENT", yaml.safe_dump(kubeconfig("ci", "https://ci:6443", "builds")))
    pattern = os.path.join(tempfile.gettempdir(), "opencli-kubeconfig-*")
    before = set(glob.glob(pattern))

    assert load_kubeconfig(explicit) is None
    load_kubeconfig()

    assert loaded_host() == "https://ci:6443"
    assert set(glob.glob(pattern)) == before
    assert current_namespace() == "builds"


def test_invalid_content_is_a_config_error(monkeypatch):
    monkeypatch.setenv("KUBECONFIG_CONTENT", "- just\n- a list\n")
    with pytest.raises(ConfigException):
        load_kubeconfig()


def test_explicit_path_wins_over_default(monkeypatch, tmp_path):
    default = write(tmp_path / "default.yaml", kubeconfig("default", "https://default:6443"))
    monkeypatch.setattr(kube_config, "KUBE_CONFIG_DEFAULT_LOCATION", default)
    explicit = write(tmp_path / "explicit.yaml", kubeconfig("explicit", "https://explicit:6443"))

    assert load_kubeconfig(explicit) == str((tmp_path / "explicit.yaml").resolve())
    assert loaded_host() == "https://explicit:6443"


def test_missing_explicit_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_kubeconfig(str(tmp_path / "nope.yaml"))


def test_default_location_merges_kubeconfig_list(monkeypatch, tmp_path, incluster):
    a = write(tmp_path / "a.yaml", kubeconfig("a", "https://a:6443", "team-a"))
    b = write(tmp_path / "b.yaml", kubeconfig("b", "https://b:6443", "team-b"))
    monkeypatch.setattr(kube_config, "KUBE_CONFIG_DEFAULT_LOCATION", f"{a}{os.pathsep}{b}")

    assert load_kubeconfig() is None
    assert loaded_host() == "https://a:6443"
    load_kubeconfig(context="b")
    assert loaded_host() == "https://b:6443"
    assert current_namespace() == "team-a"
    assert current_namespace(context="b") == "team-b"
    assert incluster == []


def test_complete_accepts_kubeconfig_list(monkeypatch, tmp_path):
    a = write(tmp_path / "a.yaml", kubeconfig("a", "https://a:6443", "team-a"))
    b = write(tmp_path / "b.yaml", kubeconfig("b", "https://b:6443"))
    monkeypatch.setattr(kube_config, "KUBE_CONFIG_DEFAULT_LOCATION", f"{a}{os.pathsep}{b}")

    options = DescribeOptions(names=["x"])
    options.complete()
    assert options.namespace == "team-a"
    assert options.client is not None


def test_falls_back_to_in_cluster_config(incluster):
    assert load_kubeconfig() is None
    assert incluster == [True]


def test_unknown_context_is_reported_not_hidden(monkeypatch, tmp_path, incluster):
    path = write(tmp_path / "config.yaml", kubeconfig("only", "https://only:6443"))
    monkeypatch.setattr(kube_config, "KUBE_CONFIG_DEFAULT_LOCATION", path)
    with pytest.raises(ConfigException, match="nope"):
        load_kubeconfig(context="nope")
    assert incluster == []


def test_current_namespace_context_override_and_fallbacks(tmp_path):
    path = write(
        tmp_path / "config.yaml",
        kubeconfig("main", "https://main:6443", extra_contexts=[("ops", "operations")]),
    )
    assert current_namespace(path) == "default"
    assert current_namespace(path, context="ops") == "operations"
    assert current_namespace(path, context="unknown") == "default"
    assert current_namespace(str(tmp_path / "nope.yaml")) == "default"


def test_current_namespace_from_service_account(monkeypatch, tmp_path):
    sa = tmp_path / "namespace"
    sa.write_text("db-system\n")
    monkeypatch.setattr(kube, "SERVICE_ACCOUNT_NAMESPACE", sa)
    assert current_namespace() == "db-system"


def test_complete_maps_config_errors(monkeypatch):
    def broken(*args):
        raise ConfigException("Invalid kube-config file. No configuration found.")

    monkeypatch.setattr("opencli.modules.dbcluster.describe.load_kubeconfig", broken)
    with pytest.raises(LocatorError, match="unable to load cluster configuration"):
        DescribeOptions(names=["x"]).complete()
