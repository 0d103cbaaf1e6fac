"""
Tests for configuration loading — toolspec.yml, environment, overrides.
"""

import os
import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from toolspec.core.config.loader import (
    ConfigError,
    config_from_environ,
    find_config_file,
    load_config,
    read_config_file,
)
from toolspec.core.models.config import ResolverConfig


@pytest.fixture
def toolspec_yml(tmp_path: Path) -> Path:
    """Create a valid toolspec.yml in a temp directory."""
    content = textwrap.dedent("""\
        host_path: /opt/dotnet/dotnet
        host_framework: netcoreapp2.1
        runtime_version: 2.1.0
        global_packages_folder: /cache/packages
        fallback_folders:
          - /fallback/one
          - /fallback/two
        locale: de
    """)
    path = tmp_path / "toolspec.yml"
    path.write_text(content)
    return path


class TestReadConfigFile:
    def test_flat(self, toolspec_yml: Path):
        data = read_config_file(toolspec_yml)
        assert data["host_path"] == "/opt/dotnet/dotnet"
        assert data["fallback_folders"] == ["/fallback/one", "/fallback/two"]

    def test_wrapped(self, tmp_path: Path):
        path = tmp_path / "toolspec.yml"
        path.write_text("toolspec:\n  tool_prefix: ''\n")
        assert read_config_file(path) == {"tool_prefix": ""}

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "toolspec.yml"
        path.write_text("")
        assert read_config_file(path) == {}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            read_config_file(tmp_path / "toolspec.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "toolspec.yml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            read_config_file(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "toolspec.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            read_config_file(path)


class TestFindConfigFile:
    def test_in_start_dir(self, toolspec_yml: Path):
        assert find_config_file(toolspec_yml.parent) == toolspec_yml.resolve()

    def test_walks_up(self, toolspec_yml: Path):
        nested = toolspec_yml.parent / "src" / "app"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == toolspec_yml.resolve()

    def test_not_found(self, tmp_path: Path):
        # tmp_path has no toolspec.yml; parents are unlikely to either
        result = find_config_file(tmp_path)
        assert result is None or result.parent != tmp_path


class TestConfigFromEnviron:
    def test_mapping(self):
        values = config_from_environ({
            "DOTNET_HOST_PATH": "/h/dotnet",
            "NUGET_PACKAGES": "/p",
            "TOOLSPEC_RUNTIME_VERSION": "2.2.0",
            "UNRELATED": "x",
        })
        assert values == {
            "host_path": "/h/dotnet",
            "global_packages_folder": "/p",
            "runtime_version": "2.2.0",
        }

    def test_fallback_folders_split(self):
        env = {"NUGET_FALLBACK_PACKAGES": os.pathsep.join(["/a", "", "/b"])}
        assert config_from_environ(env) == {"fallback_folders": ["/a", "/b"]}

    def test_empty_values_ignored(self):
        assert config_from_environ({"DOTNET_HOST_PATH": ""}) == {}


class TestLoadConfig:
    def test_defaults(self, tmp_path: Path):
        config = load_config(start_dir=tmp_path / "nowhere")
        assert config.host_framework == "netcoreapp2.2"
        assert config.tool_prefix == "dotnet-"
        assert config.fallback_folders == []

    def test_from_file(self, toolspec_yml: Path):
        config = load_config(path=toolspec_yml)
        assert config.host_framework == "netcoreapp2.1"
        assert config.package_roots() == ["/cache/packages", "/fallback/one", "/fallback/two"]

    def test_env_overrides_file(self, toolspec_yml: Path):
        config = load_config(path=toolspec_yml, environ={"NUGET_PACKAGES": "/env/packages"})
        assert config.global_packages_folder == "/env/packages"
        assert config.host_path == "/opt/dotnet/dotnet"

    def test_overrides_win(self, toolspec_yml: Path):
        config = load_config(
            path=toolspec_yml,
            environ={"DOTNET_HOST_PATH": "/env/dotnet"},
            overrides={"host_path": "/cli/dotnet", "fallback_folders": None},
        )
        assert config.host_path == "/cli/dotnet"
        assert config.fallback_folders == ["/fallback/one", "/fallback/two"]

    def test_unknown_host_framework_in_file(self, tmp_path: Path):
        path = tmp_path / "toolspec.yml"
        path.write_text("host_framework: netcoreap2.2\n")
        with pytest.raises(ConfigError, match="netcoreap2.2"):
            load_config(path=path)

    def test_unknown_host_framework_in_env(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="host_framework"):
            load_config(
                start_dir=tmp_path / "nowhere",
                environ={"TOOLSPEC_HOST_FRAMEWORK": "dotnet9"},
            )

    def test_package_folders_expand_home(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
        path = tmp_path / "toolspec.yml"
        path.write_text(textwrap.dedent("""\
            global_packages_folder: ~/.nuget/packages
            fallback_folders:
              - ~/fallback
        """))
        config = load_config(path=path)
        assert config.package_roots() == [
            str(tmp_path / ".nuget" / "packages"),
            str(tmp_path / "fallback"),
        ]

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "toolspec.yml"
        path.write_text("fallback_folders: 42\n")
        with pytest.raises(ConfigError, match="Invalid resolver configuration"):
            load_config(path=path)


class TestResolverConfig:
    def test_package_roots_deduplicated(self):
        config = ResolverConfig(global_packages_folder="/a", fallback_folders=["/b", "/a", "/b"])
        assert config.package_roots() == ["/a", "/b"]

    @pytest.mark.parametrize("moniker", ["netcoreapp2.2", ".NETCoreApp,Version=v2.1", "net6.0"])
    def test_host_framework_accepted(self, moniker):
        assert ResolverConfig(host_framework=moniker).host_framework == moniker

    def test_host_framework_rejected(self):
        with pytest.raises(ValidationError, match="unrecognised target framework"):
            ResolverConfig(host_framework="netcoreap2.2")

    def test_host_path_explicit(self):
        assert ResolverConfig(host_path="/x/dotnet").resolved_host_path() == "/x/dotnet"

    def test_host_path_from_sdk_root(self):
        config = ResolverConfig(sdk_root="/usr/share/dotnet")
        assert config.resolved_host_path() == str(Path("/usr/share/dotnet") / "dotnet")

    def test_host_path_from_path(self, monkeypatch):
        monkeypatch.setattr("toolspec.core.models.config.shutil.which", lambda name: None)
        assert ResolverConfig().resolved_host_path() == "dotnet"

    def test_lock_file_path(self, tmp_path: Path):
        assert ResolverConfig().lock_file_path(tmp_path) == tmp_path / "obj" / "project.assets.json"
