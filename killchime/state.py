"""Shared server state."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .args import Args
from .preset import Preset


@dataclass(frozen=True)
class KillState:
    """Last seen kill counters and the player they belong to."""

    steamid: str = ""
    ply_kills: int = 0
    ply_hs_kills: int = 0


@dataclass
class AppState:
    """Configuration plus the kill counters shared between requests."""

    args: Args
    preset: Preset
    stream: Optional[Any] = None
    sound_root: Path = Path("sounds")
    _kills: KillState = field(default_factory=KillState, init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def snapshot(self) -> KillState:
        """Return the current kill counters."""
        with self._lock:
            return self._kills

    def record(self, steamid: str, kills: int, hs_kills: int) -> None:
        """Store the counters from the latest update."""
        with self._lock:
            self._kills = KillState(steamid, kills, hs_kills)