"""Translate ``pygame`` events into player commands."""

from __future__ import annotations

from typing import Any, Dict, List

import pygame

from ..core.entity import Entity
from ..core.world import World
from ..systems.movement.movement_system import MovementSystem
from ..utils.cli.keys import QUIT, Command, apply_command, key_to_command

_ARROWS: Dict[int, Command] = {
    pygame.K_UP: Command("move", 0, -1),
    pygame.K_LEFT: Command("move", -1, 0),
    pygame.K_DOWN: Command("move", 0, 1),
    pygame.K_RIGHT: Command("move", 1, 0),
    pygame.K_ESCAPE: QUIT,
}


def event_to_command(ev: Any) -> Command | None:
    if ev.type == pygame.QUIT:
        return QUIT
    if ev.type != pygame.KEYDOWN:
        return None
    if ev.key in _ARROWS:
        return _ARROWS[ev.key]
    text = getattr(ev, "unicode", "")
    return key_to_command(text) if text else None


def handle_events(
    world: World,
    player: Entity,
    state: Dict[str, Any],
    movement: MovementSystem | None = None,
) -> List[Entity]:
    """Process pending ``pygame`` events; return entities the player collected."""

    removed: List[Entity] = []
    for ev in pygame.event.get():
        command = event_to_command(ev)
        if command is None:
            continue
        removed.extend(apply_command(world, player, command, state, movement))
        if not state.get("running", True):
            break
    return removed


__all__ = ["event_to_command", "handle_events"]
