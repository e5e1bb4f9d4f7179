# tests/30_independent/test_hooks.py

from typing import Any

import targeter.hooks as mod_hooks


def test_reduce_runs_reducers_in_registration_order() -> None:
    """Each reducer receives the previous result and the event context."""
    # --- setup ---
    registry = mod_hooks.ReducerRegistry()
    calls: list[tuple[str, Any]] = []

    def first(value: list[str], ctx: str) -> list[str]:
        calls.append(("first", ctx))
        return [*value, "first"]

    def second(value: list[str], ctx: str) -> list[str]:
        calls.append(("second", ctx))
        return [*value, "second"]

    registry.add("event", first)
    registry.add("event", second)

    # --- execute ---
    result = registry.reduce("event", [], "context")

    # --- verify ---
    assert result == ["first", "second"]
    assert calls == [("first", "context"), ("second", "context")]


def test_reduce_without_reducers_returns_value() -> None:
    """An event nobody listens to returns the value unchanged."""
    # --- setup ---
    registry = mod_hooks.ReducerRegistry()
    value = {"a": 1}

    # --- execute and verify ---
    assert registry.reduce("nothing", value) is value


def test_add_returns_a_remover() -> None:
    """The function returned by add() unregisters the reducer."""
    # --- setup ---
    registry = mod_hooks.ReducerRegistry()
    remove = registry.add("event", lambda value: value + 1)

    # --- execute ---
    removed = remove()

    # --- verify ---
    assert removed is True
    assert registry.reducers("event") == []
    assert registry.reduce("event", 1) == 1
    assert registry.remove("event", lambda value: value) is False


def test_emit_calls_listeners_with_context() -> None:
    """emit() notifies every listener and ignores what they return."""
    # --- setup ---
    registry = mod_hooks.ReducerRegistry()
    seen: list[tuple[Any, ...]] = []
    registry.add("built", lambda *args: seen.append(args))

    # --- execute ---
    result = registry.emit("built", "app", "production")

    # --- verify ---
    assert result is None
    assert seen == [("app", "production")]
