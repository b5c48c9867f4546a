from __future__ import annotations

from webcore.ast import Component, StateVar
from webcore.codegen import HandlerMapping, generate_runtime_js


def test_runtime_contains_store_and_dispatchers() -> None:
    js = generate_runtime_js([])
    assert "class WebCoreState" in js
    for method in ("set(key, value)", "get(key)", "subscribe(key, callback)", "notify(key, value)"):
        assert method in js
    for event in ("click", "submit", "change", "input"):
        assert f"window.webcore_handle_{event} = function(handlerId)" in js
    assert "window.webcore_handle_event = function(eventType, handlerId)" in js
    assert "[data-webcore-interpolation]" in js
    for name in ("max", "min", "abs", "round", "floor", "ceil"):
        assert f"{name}: Math.{name}" in js


def test_handlers_are_compiled_into_the_table() -> None:
    js = generate_runtime_js(
        [
            HandlerMapping("btn1", "click", "count+=1"),
            HandlerMapping("btn2", "foo", "count=0"),
        ]
    )
    assert "'btn1': function() {" in js
    assert "window.__webcore_state__.set('count', (window.__webcore_state__.get('count') || 0) + 1);" in js
    assert "'btn2': function() {" in js
    assert "window.__webcore_state__.set('count', 0);" in js


def test_state_initialisation_per_variable() -> None:
    counter = Component(
        "Counter",
        state=[StateVar("count", "number", "0"), StateVar("label", "string", '"Total"'), StateVar("extra", "any")],
    )
    js = generate_runtime_js([], [counter])
    assert "window.__webcore_state__.set('count', 0);" in js
    assert "window.__webcore_state__.set('label', \"Total\");" in js
    assert "window.__webcore_state__.set('extra', null);" in js
    # State is initialised after the store exists.
    assert js.index("new WebCoreState()") < js.index("set('count', 0)")


def test_declared_state_names_are_rewritten_in_handlers() -> None:
    component = Component("Cart", state=[StateVar("items", "number", "0")])
    js = generate_runtime_js([HandlerMapping("btn1", "click", "items=max(0,items-1)")], [component])
    assert "window.__webcore_utils__.max(0,window.__webcore_state__.get('items')-1)" in js


def test_no_hardcoded_count_initialisation() -> None:
    assert "set('count'" not in generate_runtime_js([])
