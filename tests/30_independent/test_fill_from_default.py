# tests/30_independent/test_fill_from_default.py

import targeter.utils as mod_utils


def test_fill_from_default_replaces_none_and_drops_default() -> None:
    """None values take the default; explicit values stay; default is removed."""
    # --- setup ---
    entry = {"default": "index.js", "development": None, "production": "prod.js"}

    # --- execute ---
    result = mod_utils.fill_from_default(entry)

    # --- verify ---
    assert result == {"development": "index.js", "production": "prod.js"}


def test_fill_from_default_without_default_keeps_values() -> None:
    """Without a default, None values are left as they are."""
    # --- execute ---
    result = mod_utils.fill_from_default({"development": None, "production": "a.js"})

    # --- verify ---
    assert result == {"development": None, "production": "a.js"}


def test_fill_from_default_deep_merges_over_default() -> None:
    """Mapping values are merged over the default; None takes a full copy."""
    # --- setup ---
    output = {
        "default": {"js": "[target-name].[hash].js", "css": "styles.[hash].css"},
        "development": {"js": "[target-name].js"},
        "production": None,
    }

    # --- execute ---
    result = mod_utils.fill_from_default_deep(output)

    # --- verify ---
    assert result == {
        "development": {"js": "[target-name].js", "css": "styles.[hash].css"},
        "production": {"js": "[target-name].[hash].js", "css": "styles.[hash].css"},
    }


def test_fill_from_default_deep_falsy_values_take_default() -> None:
    """Empty values in an environment fall back to the default's value."""
    # --- setup ---
    output = {"default": {"js": "app.js"}, "development": {"js": ""}}

    # --- execute ---
    result = mod_utils.fill_from_default_deep(output)

    # --- verify ---
    assert result == {"development": {"js": "app.js"}}


def test_fill_from_default_deep_copies_are_independent() -> None:
    """Environments filled from the default don't share objects."""
    # --- setup ---
    output = {"default": {"js": "a.js"}, "development": None, "production": None}

    # --- execute ---
    result = mod_utils.fill_from_default_deep(output)
    result["development"]["js"] = "changed.js"

    # --- verify ---
    assert result["production"] == {"js": "a.js"}


def test_fill_from_default_deep_without_default_is_unchanged() -> None:
    """A missing or empty default leaves the other values untouched."""
    # --- execute ---
    result = mod_utils.fill_from_default_deep({"default": None, "development": None})

    # --- verify ---
    assert result == {"development": None}
