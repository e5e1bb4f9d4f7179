# tests/50_core/test_project_config.py

from pathlib import Path

import pytest

import targeter.config as mod_config
import targeter.targets as mod_targets
from tests.utils import write_files


def _project(root: Path, **kwargs: object) -> mod_config.ProjectConfiguration:
    return mod_config.ProjectConfiguration(
        root,
        discovery=mod_targets.TargetDiscovery("my-project", root),
        **kwargs,  # type: ignore[arg-type]
    )


def test_defaults_without_overwrite_file(tmp_path: Path) -> None:
    """Without files the project only has its defaults."""
    # --- setup ---
    project = _project(tmp_path, engine="webpack")

    # --- execute ---
    config = project.get_config()

    # --- verify ---
    assert config["paths"]["source"] == "src"
    assert config["paths"]["build"] == "dist"
    assert config["targets"] == {}
    assert config["targets_templates"]["node"]["engine"] == "webpack"
    assert config["targets_templates"]["browser"]["create_folder"] is True
    assert project.overwrite_file is None


def test_overwrite_file_in_config_folder(tmp_path: Path) -> None:
    """The project overwrite file is merged over the defaults."""
    # --- setup ---
    write_files(
        tmp_path,
        {
            "config/project.config.json": (
                '{"paths": {"build": "build"}, "targets": {"api": {"type": "node"}}}'
            ),
        },
    )
    project = _project(tmp_path)

    # --- execute ---
    config = project.get_config()

    # --- verify ---
    assert project.overwrite_file == tmp_path / "config" / "project.config.json"
    assert config["paths"] == {
        "source": "src",
        "build": "build",
        "config": "config",
        "private_modules": "private",
    }
    assert config["targets"] == {"api": {"type": "node"}}


def test_overwrite_candidates_order(tmp_path: Path) -> None:
    """The Python file at the root config name wins over the other candidates."""
    # --- setup ---
    write_files(
        tmp_path,
        {
            "config/targeter.config.py": "config = {'paths': {'source': 'app'}}\n",
            "config/project.config.json": '{"paths": {"source": "lib"}}',
        },
    )

    # --- execute ---
    config = _project(tmp_path).get_config()

    # --- verify ---
    assert config["paths"]["source"] == "app"


def test_discovered_targets_are_folded_under_declared_ones(tmp_path: Path) -> None:
    """Declared settings win over discovered ones, key by key."""
    # --- setup ---
    write_files(
        tmp_path,
        {
            "src/api/index.js": "import fs from 'fs';\n",
            "src/web/index.js": "document.getElementById('app');\n",
            "config/project.config.json": (
                '{"targets": {"web": {"engine": "rollup"}, "docs": {}}}'
            ),
        },
    )

    # --- execute ---
    targets = _project(tmp_path).get_config()["targets"]

    # --- verify ---
    assert set(targets) == {"api", "web", "docs"}
    assert targets["api"]["type"] == "node"
    assert targets["web"]["type"] == "browser"
    assert targets["web"]["engine"] == "rollup"


def test_single_declared_target_renames_single_discovered(tmp_path: Path) -> None:
    """One declared and one discovered target with different names merge."""
    # --- setup ---
    write_files(
        tmp_path,
        {
            "src/index.js": "import fs from 'fs';\n",
            "config/project.config.json": '{"targets": {"server": {"bundle": true}}}',
        },
    )

    # --- execute ---
    targets = _project(tmp_path).get_config()["targets"]

    # --- verify ---
    assert list(targets) == ["server"]
    assert targets["server"]["name"] == "server"
    assert targets["server"]["has_folder"] is False
    assert targets["server"]["bundle"] is True


def test_find_targets_can_be_disabled(tmp_path: Path) -> None:
    """Disabling find_targets keeps only the declared targets."""
    # --- setup ---
    write_files(
        tmp_path,
        {
            "src/index.js": "console.log('hi');\n",
            "config/project.config.json": (
                '{"others": {"find_targets": {"enabled": false}}}'
            ),
        },
    )

    # --- execute ---
    config = _project(tmp_path).get_config()

    # --- verify ---
    assert config["targets"] == {}


def test_discovery_defaults_to_the_package_name(tmp_path: Path) -> None:
    """Without a finder, a single-target layout is named after the package."""
    # --- setup ---
    write_files(
        tmp_path,
        {"package.json": '{"name": "pkg-name"}', "src/index.js": "console.log(1);\n"},
    )

    # --- execute ---
    config = mod_config.ProjectConfiguration(tmp_path).get_config()

    # --- verify ---
    assert list(config["targets"]) == ["pkg-name"]


def test_get_settings_raises_on_invalid_settings(tmp_path: Path) -> None:
    """Invalid settings raise ValueError carrying the summary."""
    # --- setup ---
    write_files(
        tmp_path, {"config/project.config.json": '{"targets": {"a": {"bundle": 1}}}'}
    )

    # --- execute and verify ---
    with pytest.raises(ValueError, match="contain validation errors") as excinfo:
        _project(tmp_path).get_settings()
    assert excinfo.value.data.errors  # type: ignore[attr-defined]


def test_get_settings_returns_valid_settings(tmp_path: Path) -> None:
    """Valid settings come back as they were merged."""
    # --- setup ---
    project = _project(tmp_path)

    # --- execute ---
    settings = project.get_settings(strict=True)

    # --- verify ---
    assert settings is project.get_config()


def test_pick_build_engine_uses_known_order() -> None:
    """The first known engine that's installed wins."""
    # --- execute and verify ---
    assert mod_config.pick_build_engine(["rollup", "webpack"]) == "webpack"
    assert mod_config.pick_build_engine(["rollup"]) == "rollup"
    assert mod_config.pick_build_engine(["parcel"]) is None


def test_target_configuration_extends_parent_on_every_call(tmp_path: Path) -> None:
    """TargetConfiguration is rebuilt each call, on top of its parent."""
    # --- setup ---
    write_files(
        tmp_path,
        {
            "config/webpack.browser.config.py": (
                "def config(build_type):\n"
                "    return {'paths': {'build': 'dist-' + build_type}}\n"
            ),
        },
    )
    parent = _project(tmp_path)
    layer = mod_config.TargetConfiguration(
        tmp_path, "webpack.browser.config.py", parent
    )

    # --- execute ---
    development = layer.get_config("development")
    production = layer.get_config("production")

    # --- verify ---
    assert development["paths"]["build"] == "dist-development"
    assert production["paths"]["build"] == "dist-production"
    assert production["paths"]["source"] == "src"
