# tests/30_independent/test_get_property_with_path.py

import pytest

import targeter.utils as mod_utils


def test_get_property_with_path_walks_nested_keys() -> None:
    """A slash separated path reads nested values."""
    # --- setup ---
    settings = {"paths": {"source": "src"}, "others": {"watch": {"poll": True}}}

    # --- execute and verify ---
    assert mod_utils.get_property_with_path(settings, "paths/source") == "src"
    assert mod_utils.get_property_with_path(settings, "others/watch/poll") is True


def test_get_property_with_path_custom_delimiter() -> None:
    """The delimiter can be changed."""
    # --- execute ---
    result = mod_utils.get_property_with_path({"a": {"b": 1}}, "a.b", delimiter=".")

    # --- verify ---
    assert result == 1


def test_get_property_with_path_raises_for_missing_path() -> None:
    """Missing segments raise KeyError naming the path walked so far."""
    # --- execute and verify ---
    with pytest.raises(KeyError, match="There's nothing on 'paths/nope'"):
        mod_utils.get_property_with_path({"paths": {"source": "src"}}, "paths/nope")


def test_get_property_with_path_raises_when_walking_into_a_value() -> None:
    """Walking past a scalar raises KeyError too."""
    # --- execute and verify ---
    with pytest.raises(KeyError, match="nothing on"):
        mod_utils.get_property_with_path({"paths": "src"}, "paths/source")
