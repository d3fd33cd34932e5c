"""Internal state holder for cancellation tokens.

Dataclass used by ``CancellationToken`` to track cancellation status, the
optional reason and the callbacks waiting for the cancel signal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass
class State:
    """Internal state for cooperative cancellation tokens."""

    cancelled: bool = False
    reason: Optional[str] = None
    callbacks: List[Callable[[], None]] = field(default_factory=list)


__all__ = ["State"]
