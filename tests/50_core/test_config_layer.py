# tests/50_core/test_config_layer.py

from pathlib import Path
from typing import Any

import pytest

import targeter.config as mod_config
from tests.utils import write_files


class CountingLayer(mod_config.ConfigurationLayer):
    def __init__(
        self,
        root: Path,
        overwrite_path: str,
        base: dict[str, Any],
        **kwargs: Any,
    ) -> None:
        super().__init__(root, overwrite_path, **kwargs)
        self.base = base
        self.calls = 0

    def create_config(self, *args: Any) -> dict[str, Any]:
        self.calls += 1
        return {**self.base, "args": list(args)}


class IncompleteLayer(mod_config.ConfigurationLayer):
    pass


def test_get_config_merges_parent_base_and_file(tmp_path: Path) -> None:
    """Parent, base and overwrite file merge with growing precedence."""
    # --- setup ---
    write_files(
        tmp_path,
        {"config/child.json": '{"c": "file", "nested": {"from_file": true}}'},
    )
    parent = CountingLayer(tmp_path, "parent.json", {"a": "parent", "b": "parent"})
    child = CountingLayer(
        tmp_path,
        "child.json",
        {"b": "child", "c": "child", "nested": {"from_base": True}},
        parent=parent,
    )

    # --- execute ---
    result = child.get_config()

    # --- verify ---
    assert result == {
        "a": "parent",
        "b": "child",
        "c": "file",
        "nested": {"from_base": True, "from_file": True},
        "args": [],
    }
    assert child.overwrite_file == tmp_path / "config" / "child.json"
    assert parent.overwrite_file is None


def test_get_config_is_cached_unless_factory(tmp_path: Path) -> None:
    """Without as_factory the configuration is built only once."""
    # --- setup ---
    cached = CountingLayer(tmp_path, "none.json", {"a": 1})
    factory = CountingLayer(tmp_path, "none.json", {"a": 1}, as_factory=True)

    # --- execute ---
    first = cached.get_config("x")
    second = cached.get_config("y")
    factory.get_config("x")
    rebuilt = factory.get_config("y")

    # --- verify ---
    assert first is second
    assert cached.calls == 1
    assert factory.calls == 2
    assert rebuilt["args"] == ["y"]


def test_callable_overwrite_receives_the_same_args(tmp_path: Path) -> None:
    """A callable overwrite is invoked with the get_config arguments."""
    # --- setup ---
    write_files(
        tmp_path,
        {"config/layer.py": "def config(name):\n    return {'name': name.upper()}\n"},
    )
    layer = CountingLayer(tmp_path, "layer.py", {"name": "base"}, as_factory=True)

    # --- execute ---
    result = layer.get_config("app")

    # --- verify ---
    assert result["name"] == "APP"


def test_overwrite_lists_merge_by_index(tmp_path: Path) -> None:
    """Lists in the overwrite file replace items by position."""
    # --- setup ---
    write_files(tmp_path, {"config/layer.json": '{"items": ["first"]}'})
    layer = CountingLayer(tmp_path, "layer.json", {"items": ["a", "b", "c"]})

    # --- execute ---
    result = layer.get_config()

    # --- verify ---
    assert result["items"] == ["first", "b", "c"]


def test_base_class_cant_be_instantiated(tmp_path: Path) -> None:
    """ConfigurationLayer itself is abstract."""
    # --- execute and verify ---
    with pytest.raises(TypeError, match="abstract"):
        mod_config.ConfigurationLayer(tmp_path, "layer.json")


def test_unoverridden_create_config_raises(tmp_path: Path) -> None:
    """Subclasses must implement create_config."""
    # --- setup ---
    layer = IncompleteLayer(tmp_path, "layer.json")

    # --- execute and verify ---
    with pytest.raises(NotImplementedError, match="must be overridden"):
        layer.get_config()
