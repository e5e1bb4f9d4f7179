# tests/50_core/test_config_loader.py

from pathlib import Path

import pytest

import targeter.config.config_loader as mod_config_loader
from tests.utils import write_files


def test_find_config_file_prefers_first_candidate(tmp_path: Path) -> None:
    """Candidates are tried in order under the config folder."""
    # --- setup ---
    write_files(tmp_path, {"config/b.json": "{}", "config/a.json": "{}"})

    # --- execute ---
    result = mod_config_loader.find_config_file(tmp_path, ["a.json", "b.json"])

    # --- verify ---
    assert result == tmp_path / "config" / "a.json"


def test_find_config_file_accepts_config_prefixed_candidates(tmp_path: Path) -> None:
    """A candidate starting with the config folder is relative to the root."""
    # --- setup ---
    write_files(tmp_path, {"config/project.config.json": "{}"})

    # --- execute ---
    result = mod_config_loader.find_config_file(
        tmp_path, ["missing.json", "config/project.config.json"]
    )

    # --- verify ---
    assert result == tmp_path / "config" / "project.config.json"


def test_find_config_file_returns_none_when_missing(tmp_path: Path) -> None:
    """Absence of every candidate is not an error."""
    # --- execute and verify ---
    assert mod_config_loader.find_config_file(tmp_path, "nope.py") is None


def test_load_config_python_dict(tmp_path: Path) -> None:
    """A Python file exposing a `config` dict returns it."""
    # --- setup ---
    path = tmp_path / "overwrite.py"
    path.write_text("config = {'paths': {'source': 'app'}}\n")

    # --- execute ---
    result = mod_config_loader.load_config(path)

    # --- verify ---
    assert result == {"paths": {"source": "app"}}


def test_load_config_python_callable(tmp_path: Path) -> None:
    """A Python file exposing a callable returns the callable itself."""
    # --- setup ---
    path = tmp_path / "overwrite.py"
    path.write_text("def config(name):\n    return {'name': name}\n")

    # --- execute ---
    result = mod_config_loader.load_config(path)

    # --- verify ---
    assert callable(result)
    assert result("app") == {"name": "app"}


def test_load_config_python_without_config_raises(tmp_path: Path) -> None:
    """A Python file that doesn't define `config` is rejected."""
    # --- setup ---
    path = tmp_path / "overwrite.py"
    path.write_text("settings = {}\n")

    # --- execute and verify ---
    with pytest.raises(ValueError, match="did not define `config`"):
        mod_config_loader.load_config(path)


def test_load_config_python_error_is_wrapped(tmp_path: Path) -> None:
    """Errors raised while executing the file surface as RuntimeError."""
    # --- setup ---
    path = tmp_path / "overwrite.py"
    path.write_text("raise KeyError('boom')\n")

    # --- execute and verify ---
    with pytest.raises(RuntimeError, match="Error while executing Python config"):
        mod_config_loader.load_config(path)


def test_load_config_python_bad_type_raises(tmp_path: Path) -> None:
    """`config` must be a dict, a callable or None."""
    # --- setup ---
    path = tmp_path / "overwrite.py"
    path.write_text("config = 42\n")

    # --- execute and verify ---
    with pytest.raises(TypeError, match="must be a dict"):
        mod_config_loader.load_config(path)


def test_load_config_jsonc(tmp_path: Path) -> None:
    """JSONC files are parsed with comments stripped."""
    # --- setup ---
    path = tmp_path / "overwrite.jsonc"
    path.write_text('{\n  // comment\n  "targets": {"app": {"type": "browser"}},\n}\n')

    # --- execute ---
    result = mod_config_loader.load_config(path)

    # --- verify ---
    assert result == {"targets": {"app": {"type": "browser"}}}


def test_load_config_json_list_raises(tmp_path: Path) -> None:
    """A JSON file must hold an object."""
    # --- setup ---
    path = tmp_path / "overwrite.json"
    path.write_text("[1, 2]")

    # --- execute and verify ---
    with pytest.raises(TypeError, match="must contain an object"):
        mod_config_loader.load_config(path)


def test_load_config_unsupported_suffix_raises(tmp_path: Path) -> None:
    """Unknown file types are rejected."""
    # --- setup ---
    path = tmp_path / "overwrite.yaml"
    path.write_text("a: 1")

    # --- execute and verify ---
    with pytest.raises(ValueError, match="Unsupported configuration file type"):
        mod_config_loader.load_config(path)


def test_load_package_info_reads_name_and_version(tmp_path: Path) -> None:
    """Only the string name and version are kept."""
    # --- setup ---
    write_files(
        tmp_path,
        {"package.json": '{"name": "my-app", "version": "1.2.3", "private": true}'},
    )

    # --- execute ---
    result = mod_config_loader.load_package_info(tmp_path)

    # --- verify ---
    assert result == {"name": "my-app", "version": "1.2.3"}


def test_load_package_info_missing_file(tmp_path: Path) -> None:
    """Without a package.json the project has no metadata."""
    # --- execute and verify ---
    assert mod_config_loader.load_package_info(tmp_path) == {}
