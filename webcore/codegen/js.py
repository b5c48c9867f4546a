"""Runtime JavaScript emitted next to the generated pages (``webcore.js``)."""

from __future__ import annotations

import textwrap
from string import Template
from typing import Iterable, List, Sequence

from webcore.ast import Component

from .expressions import STATE_OBJECT, compile_expression
from .html import NATIVE_EVENTS, HandlerMapping

UTILITY_FUNCTIONS = ("max", "min", "abs", "round", "floor", "ceil")

_RUNTIME_TEMPLATE = Template(
    textwrap.dedent(
        """\
        // WebCore Runtime
        (function() {
          'use strict';

          // Compiled Event Handlers
          window.__webcore_handlers__ = {
        $handlers
          };

          // State Management
          class WebCoreState {
            constructor() {
              this.data = new Map();
              this.listeners = new Map();
            }

            set(key, value) {
              this.data.set(key, value);
              this.notify(key, value);
            }

            get(key) {
              return this.data.get(key);
            }

            subscribe(key, callback) {
              if (!this.listeners.has(key)) {
                this.listeners.set(key, []);
              }
              this.listeners.get(key).push(callback);
            }

            notify(key, value) {
              const callbacks = this.listeners.get(key) || [];
              callbacks.forEach(callback => callback(value));
            }
          }

          window.__webcore_state__ = new WebCoreState();

          // Initial state
        $state_init

          // Utility Functions
          window.__webcore_utils__ = {
        $utils
          };

          function dispatch(handlerId) {
            const handler = window.__webcore_handlers__[handlerId];
            if (handler) {
              handler();
            }
          }

          // Global HTML5 event handlers
        $dispatchers
          window.webcore_handle_event = function(eventType, handlerId) {
            dispatch(handlerId);
          };

          // Initialize WebCore
          document.addEventListener('DOMContentLoaded', function() {
            const interpolations = document.querySelectorAll('[data-webcore-interpolation]');
            interpolations.forEach(function(element) {
              const varName = element.getAttribute('data-webcore-interpolation');
              const updateText = function() {
                const value = window.__webcore_state__.get(varName);
                element.textContent = value !== undefined && value !== null ? value : '';
              };
              updateText();
              window.__webcore_state__.subscribe(varName, updateText);
            });
          });
        })();
        """
    )
)


def _indent(lines: Iterable[str], prefix: str = "  ") -> str:
    return "\n".join(f"{prefix}{line}" if line else line for line in lines)


def _handler_entries(handlers: Sequence[HandlerMapping], state_names: Sequence[str]) -> List[str]:
    lines: List[str] = []
    for handler in handlers:
        lines.extend(
            [
                f"  '{handler.id}': function() {{",
                "    try {",
                f"      {compile_expression(handler.expression, state_names)};",
                "    } catch (error) {",
                "      console.error('Error executing handler:', error);",
                "    }",
                "  },",
            ]
        )
    return lines


def generate_state_init(components: Iterable[Component]) -> str:
    """One ``set`` statement per declared state variable, components in the given order."""
    lines: List[str] = []
    for component in components:
        for var in component.state:
            default = var.default_value if var.default_value is not None else "null"
            lines.append(f"{STATE_OBJECT}.set('{var.name}', {default});")
    return "\n".join(lines)


def generate_runtime_js(
    handlers: Sequence[HandlerMapping],
    components: Sequence[Component] = (),
) -> str:
    """Render the runtime: store, compiled handler table, utilities, dispatchers and binder."""
    state_names: List[str] = []
    for component in components:
        for var in component.state:
            if var.name not in state_names:
                state_names.append(var.name)

    state_init = generate_state_init(components)
    dispatchers: List[str] = []
    for event_type in NATIVE_EVENTS:
        dispatchers.extend(
            [
                f"window.webcore_handle_{event_type} = function(handlerId) {{",
                "  dispatch(handlerId);",
                "};",
            ]
        )
    utils = [f"  {name}: Math.{name}," for name in UTILITY_FUNCTIONS]
    utils[-1] = utils[-1].rstrip(",")

    return _RUNTIME_TEMPLATE.substitute(
        handlers=_indent(_handler_entries(handlers, state_names)),
        state_init=_indent(state_init.splitlines()) if state_init else "  // (none)",
        utils=_indent(utils),
        dispatchers=_indent(dispatchers),
    )


__all__ = ["generate_runtime_js", "generate_state_init", "UTILITY_FUNCTIONS"]
