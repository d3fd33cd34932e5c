"""Anthropic prompt-caching strategies.

Each strategy is a pure function ``(body) -> body'`` that returns a copy of
an Anthropic ``messages`` body with ``cache_control: {"type": "ephemeral"}``
markers placed on selected boundaries:

``none``
    No markers.
``system_only``
    The last system block.
``system_and_tools`` (default)
    The last system block and the last tool definition.
``optimized``
    As ``system_and_tools`` plus the last content block of each of the two
    most recent user turns, so a growing conversation reuses its prefix.

Strategy names are matched case-insensitively with ``_``/``-`` ignored, so
``systemAndTools`` and ``system_and_tools`` are the same strategy. Unknown
names fall back to the default with a ``translate.warning`` log event.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Optional

from ..base.logging import get_logger, log_event
from ..config.defaults import DEFAULT_CACHING_STRATEGY

CachingStrategy = Callable[[Dict[str, Any]], Dict[str, Any]]

_logger = get_logger("adapters.anthropic.caching")

_EPHEMERAL = {"type": "ephemeral"}
_CACHED_USER_TURNS = 2


def _mark(block: Dict[str, Any]) -> None:
    block["cache_control"] = dict(_EPHEMERAL)


def _mark_system(body: Dict[str, Any]) -> None:
    system = body.get("system")
    if isinstance(system, list) and system:
        _mark(system[-1])


def _mark_tools(body: Dict[str, Any]) -> None:
    tools = body.get("tools")
    if isinstance(tools, list) and tools:
        _mark(tools[-1])


def _mark_recent_user_turns(body: Dict[str, Any]) -> None:
    marked = 0
    for message in reversed(body.get("messages") or []):
        if marked >= _CACHED_USER_TURNS:
            break
        if message.get("role") != "user":
            continue
        content = message.get("content")
        if isinstance(content, str):
            if not content.strip():
                continue
            message["content"] = [{"type": "text", "text": content}]
            content = message["content"]
        if isinstance(content, list) and content:
            _mark(content[-1])
            marked += 1


def no_caching(body: Dict[str, Any]) -> Dict[str, Any]:
    return copy.deepcopy(body)


def system_only(body: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(body)
    _mark_system(out)
    return out


def system_and_tools(body: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(body)
    _mark_system(out)
    _mark_tools(out)
    return out


def optimized(body: Dict[str, Any]) -> Dict[str, Any]:
    out = system_and_tools(body)
    _mark_recent_user_turns(out)
    return out


CACHING_STRATEGIES: Dict[str, CachingStrategy] = {
    "none": no_caching,
    "system_only": system_only,
    "system_and_tools": system_and_tools,
    "optimized": optimized,
}

_LOOKUP = {name.replace("_", ""): name for name in CACHING_STRATEGIES}


def resolve_strategy_name(name: Optional[str]) -> str:
    """Return the canonical strategy name for ``name`` (default if unknown)."""
    if name is None or not name.strip():
        return DEFAULT_CACHING_STRATEGY
    key = name.strip().lower().replace("_", "").replace("-", "")
    resolved = _LOOKUP.get(key)
    if resolved is None:
        log_event(
            _logger,
            "translate.warning",
            None,
            provider="anthropic",
            warning="unknown caching strategy; using default",
            caching_strategy=name,
            fallback=DEFAULT_CACHING_STRATEGY,
        )
        return DEFAULT_CACHING_STRATEGY
    return resolved


def caching_enabled(name: Optional[str]) -> bool:
    return resolve_strategy_name(name) != "none"


def apply_caching_strategy(body: Dict[str, Any], strategy_name: Optional[str]) -> Dict[str, Any]:
    """Return a copy of ``body`` with the strategy's cache markers applied.

    The input body is never mutated.
    """
    return CACHING_STRATEGIES[resolve_strategy_name(strategy_name)](body)


def available_strategies() -> List[str]:
    return list(CACHING_STRATEGIES)


__all__ = [
    "CACHING_STRATEGIES",
    "CachingStrategy",
    "apply_caching_strategy",
    "available_strategies",
    "caching_enabled",
    "resolve_strategy_name",
]
