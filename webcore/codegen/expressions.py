"""Compilation of event-handler expressions into runtime JavaScript.

The rewrite is textual. Assignments become ``window.__webcore_state__.set``
calls, reads of state variables become ``window.__webcore_state__.get``
calls, and ``max(``/``min(`` are routed through ``window.__webcore_utils__``.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

STATE_OBJECT = "window.__webcore_state__"
UTILS_OBJECT = "window.__webcore_utils__"
ALWAYS_STATE_NAMES = ("count",)
UTILITY_CALLS = ("max", "min")


def _word(name: str) -> str:
    # Whole identifier only, and never a member access such as ``obj.count``.
    return rf"(?<![\w.$]){re.escape(name)}(?![\w$])"


def _rewrite_pattern(state_names: Iterable[str]) -> re.Pattern:
    names = sorted(set(ALWAYS_STATE_NAMES).union(state_names), key=len, reverse=True)
    calls = "|".join(UTILITY_CALLS)
    state = "|".join(_word(name) for name in names)
    return re.compile(rf"(?P<call>(?<![\w.$])(?:{calls})(?=\())|(?P<state>{state})")


def rewrite_reads(text: str, state_names: Iterable[str] = ()) -> str:
    """Route utility calls and state reads in ``text`` through the runtime objects."""
    pattern = _rewrite_pattern(state_names)

    def substitute(match: re.Match) -> str:
        if match.group("call"):
            return f"{UTILS_OBJECT}.{match.group('call')}"
        return f"{STATE_OBJECT}.get('{match.group('state')}')"

    return pattern.sub(substitute, text)


def _compound(target: str, operator: str, value: str) -> str:
    return f"{STATE_OBJECT}.set('{target}', ({STATE_OBJECT}.get('{target}') || 0) {operator} {value})"


def compile_expression(expression: str, state_names: Optional[Iterable[str]] = None) -> str:
    """Translate a handler expression such as ``count += 1`` into JavaScript.

    >>> compile_expression("count = max(0, count - 1)")
    "window.__webcore_state__.set('count', window.__webcore_utils__.max(0, window.__webcore_state__.get('count') - 1))"
    """
    names = list(state_names or ())
    if "+=" in expression:
        target, value = expression.split("+=", 1)
        return _compound(target.strip(), "+", value.strip())
    if "-=" in expression:
        target, value = expression.split("-=", 1)
        return _compound(target.strip(), "-", value.strip())
    if "=" in expression and "==" not in expression and "!=" not in expression:
        target, value = expression.split("=", 1)
        return f"{STATE_OBJECT}.set('{target.strip()}', {rewrite_reads(value.strip(), names)})"
    return rewrite_reads(expression, names)


__all__ = ["compile_expression", "rewrite_reads", "STATE_OBJECT", "UTILS_OBJECT"]
