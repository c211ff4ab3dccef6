"""Keypress capture and key-to-command mapping for the terminal front-end."""

from __future__ import annotations

import logging
import os
import queue
import sys
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TextIO

from ...core.entity import Entity
from ...core.world import World
from ...systems.movement.movement_system import MovementSystem

# ---------------------------------------------------------------------------
# Cross-platform helpers for "is there a key waiting?"
# ---------------------------------------------------------------------------

if os.name == "nt":  # Windows ──────────────────────────────────────────────
    import msvcrt  # type: ignore  # std-lib on Windows only
else:  # POSIX (Linux, macOS, …) ────────────────────────────────────────────
    import select
    import termios
    import tty

logger = logging.getLogger(__name__)

CTRL_C = "\x03"
ESCAPE = "\x1b"

# ANSI cursor keys as a terminal in cbreak mode sends them
ARROW_UP = ESCAPE + "[A"
ARROW_DOWN = ESCAPE + "[B"
ARROW_RIGHT = ESCAPE + "[C"
ARROW_LEFT = ESCAPE + "[D"

# Second character of a Windows console extended key
_WINDOWS_ARROWS = {"H": ARROW_UP, "P": ARROW_DOWN, "M": ARROW_RIGHT, "K": ARROW_LEFT}


@dataclass(frozen=True)
class Command:
    """A player intent decoded from a key."""

    name: str
    dx: int = 0
    dy: int = 0


QUIT = Command("quit")

_KEYMAP: Dict[str, Command] = {
    "w": Command("move", 0, -1),
    "a": Command("move", -1, 0),
    "s": Command("move", 0, 1),
    "d": Command("move", 1, 0),
    "q": QUIT,
    CTRL_C: QUIT,
    ARROW_UP: Command("move", 0, -1),
    ARROW_DOWN: Command("move", 0, 1),
    ARROW_RIGHT: Command("move", 1, 0),
    ARROW_LEFT: Command("move", -1, 0),
}


def key_to_command(key: str) -> Optional[Command]:
    """Return the :class:`Command` bound to ``key`` or ``None``."""
    if key.startswith(ESCAPE):
        return _KEYMAP.get(key)
    return _KEYMAP.get(key.lower())


def split_keys(chunk: str) -> List[str]:
    """Split raw terminal input into keys, keeping ``ESC [ X`` sequences whole.

    A lone escape (or one cut off at the end of ``chunk``) is its own key.
    """

    keys: List[str] = []
    i = 0
    while i < len(chunk):
        if chunk.startswith(ESCAPE + "[", i) and i + 2 < len(chunk):
            keys.append(chunk[i:i + 3])
            i += 3
        else:
            keys.append(chunk[i])
            i += 1
    return keys


def apply_command(
    world: World,
    player: Entity,
    command: Command,
    state: Dict[str, Any],
    movement: MovementSystem | None = None,
) -> List[Entity]:
    """Carry out ``command`` for ``player``; return the entities it removed.

    Whatever the player runs into is collected, i.e. removed from ``world``.
    """

    if command.name == "quit":
        state["running"] = False
        return []
    if command.name != "move" or not world.has_entity(player):
        return []

    movement = movement if movement is not None else MovementSystem(world)
    result = movement.move_by(player, command.dx, command.dy)
    removed: List[Entity] = []
    for entity in result.touched:
        if world.remove_entity(entity) is not None:
            removed.append(entity)
    if removed:
        state["collected"] = state.get("collected", 0) + len(removed)
        logger.info("Player collected %d entit(ies)", len(removed))
    return removed


# ---------------------------------------------------------------------------
# Background key reader
# ---------------------------------------------------------------------------


class KeyReader:
    """Read single keypresses on a daemon thread into a queue."""

    def __init__(self, stream: TextIO | None = None, poll_interval: float = 0.05) -> None:
        self.stream = stream if stream is not None else sys.stdin
        self.poll_interval = poll_interval
        self._keys: queue.Queue[str] = queue.Queue()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._saved_attrs: Any = None

    def start(self) -> threading.Thread:
        if os.name != "nt" and self.stream.isatty():
            fd = self.stream.fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="KeyReaderThread")
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=1.0)
        if self._saved_attrs is not None:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def feed(self, key: str) -> None:
        """Queue ``key`` as if it had been typed."""
        self._keys.put(key)

    def poll_keys(self) -> List[str]:
        """Drain and return every key typed since the last call."""
        keys: List[str] = []
        while True:
            try:
                keys.append(self._keys.get_nowait())
            except queue.Empty:
                return keys

    def _read_key(self) -> Optional[str]:
        """Return whatever was typed since the last read, ``""`` on EOF."""
        if os.name == "nt":
            if msvcrt.kbhit():
                ch = msvcrt.getwch()
                if ch in ("\x00", "\xe0"):
                    return _WINDOWS_ARROWS.get(msvcrt.getwch(), "")
                return ch
            self._stop.wait(self.poll_interval)
            return None
        ready, _, _ = select.select([self.stream], [], [], self.poll_interval)
        if not ready:
            return None
        # Read the raw descriptor so an escape sequence arrives in one piece
        return os.read(self.stream.fileno(), 32).decode("utf-8", errors="replace")

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                chunk = self._read_key()
            except (OSError, ValueError) as exc:
                logger.error("Key reader stopped: %s", exc)
                break
            if chunk == "" and os.name != "nt":
                # EOF, stdin closed
                break
            if chunk:
                for key in split_keys(chunk):
                    self._keys.put(key)


__all__ = ["Command", "KeyReader", "QUIT", "apply_command", "key_to_command", "split_keys"]
