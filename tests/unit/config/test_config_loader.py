from pathlib import Path

import pytest

from gostub.config import default_module_root, load_config_from_path
from gostub.spec import ConfigError


def test_defaults_without_pyproject(workspace_factory, monkeypatch, tmp_path):
    monkeypatch.setenv("GOPATH", str(tmp_path / "gp"))

    config = load_config_from_path(tmp_path)

    assert config.config_path is None
    assert config.module_root == tmp_path / "gp" / "src"
    assert config.resolver == "golist"
    assert config.search_paths == [config.module_root]
    assert config.goimports == "goimports"


def test_reads_tool_table_relative_to_pyproject(workspace_factory, tmp_path):
    root = tmp_path.resolve()
    workspace_factory.with_config(
        {
            "module_root": "gopath/src",
            "resolver": "searchpath",
            "search_paths": ["gopath/src", "/opt/go/src"],
            "goimports": "/usr/local/bin/goimports",
        }
    ).build()
    nested = tmp_path / "gopath" / "src" / "example.com"
    nested.mkdir(parents=True)

    config = load_config_from_path(nested)

    assert config.config_path == root / "pyproject.toml"
    assert config.module_root == root / "gopath" / "src"
    assert config.search_paths == [root / "gopath" / "src", Path("/opt/go/src")]
    assert config.resolver == "searchpath"
    assert config.goimports == "/usr/local/bin/goimports"
    assert config.workdir == root / "."


def test_environment_overrides(workspace_factory, monkeypatch, tmp_path):
    workspace_factory.with_config({"module_root": "gopath/src"}).build()
    monkeypatch.setenv("GOSTUB_MODULE_ROOT", "/srv/go/src")
    monkeypatch.setenv("GOSTUB_GOIMPORTS", "gofmt")

    config = load_config_from_path(tmp_path)

    assert config.module_root == Path("/srv/go/src")
    assert config.goimports == "gofmt"


def test_unknown_resolver(workspace_factory, tmp_path):
    workspace_factory.with_config({"resolver": "bazel"}).build()

    with pytest.raises(ConfigError) as excinfo:
        load_config_from_path(tmp_path)

    assert "bazel" in str(excinfo.value)


def test_default_module_root_uses_first_gopath_entry(monkeypatch):
    monkeypatch.setenv("GOPATH", "/first:/second")
    assert default_module_root() == Path("/first/src")

    monkeypatch.delenv("GOPATH")
    assert default_module_root() == Path.home() / "go" / "src"
