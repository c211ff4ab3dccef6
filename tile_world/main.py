# tile_world/main.py
"""World bootstrap and scheduled tick/draw loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import argparse
import logging
import random

from .config import CONFIG_PATH, Config, LoggingConfig, load_config
from .core.entity import Entity
from .core.grid import TileGrid
from .core.shape import Shape
from .core.systems_manager import SystemsManager
from .core.time_manager import Scheduler
from .core.world import World
from .systems.chase_system import ChaseSystem
from .systems.movement.movement_system import MovementSystem
from .systems.spawn_system import SpawnSystem
from .utils.cli.keys import KeyReader, apply_command, key_to_command
from .utils.cli.terminal_view import TerminalView

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(cfg: LoggingConfig) -> None:
    """Apply the global level, optional log file and per-module levels."""

    numeric_level = getattr(logging, cfg.global_level.upper(), logging.INFO)
    kwargs: Dict[str, Any] = {"level": numeric_level, "format": LOG_FORMAT, "force": True}
    if cfg.file:
        kwargs["filename"] = cfg.file
    logging.basicConfig(**kwargs)

    for module_name, level_str in cfg.module_levels.items():
        module_numeric_level = getattr(logging, level_str.upper(), None)
        if module_numeric_level is not None:
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning("Invalid log level '%s' for module '%s' in config.", level_str, module_name)


@dataclass
class Game:
    """Everything the run loop drives: world, player, systems and scheduler."""

    config: Config
    world: World
    player: Entity
    movement: MovementSystem
    systems_manager: SystemsManager
    scheduler: Scheduler
    spawner: Optional[SpawnSystem] = None
    view: Any = None
    state: Dict[str, Any] = field(default_factory=lambda: {"running": True, "collected": 0})
    tick_counter: int = 0

    def tick(self) -> None:
        """Logic phase: run every registered system once."""
        self.tick_counter += 1
        self.systems_manager.update(self.world, self.tick_counter)

    def draw(self) -> None:
        if self.view is None:
            return
        self.view.render(self.world)

    def spawn(self) -> None:
        if self.spawner is not None:
            self.spawner.spawn_batch()

    def handle_key(self, key: str) -> List[Entity]:
        command = key_to_command(key)
        if command is None:
            return []
        return apply_command(self.world, self.player, command, self.state, self.movement)


def bootstrap(
    config: Config | None = None,
    *,
    scheduler: Scheduler | None = None,
    rng: random.Random | None = None,
) -> Game:
    """Build a :class:`Game` from ``config`` (default: the project config)."""

    cfg = config if config is not None else load_config()

    world = World(TileGrid.from_strings(cfg.world.map))
    solid = frozenset(cfg.world.solid_symbols)
    player_x, player_y = cfg.player.start
    player = Entity(Shape.from_strings(cfg.player.shape), player_x, player_y, solid, name="player")
    world.add_entity(player)
    logger.info(
        "[Bootstrap] World %dx%d, player at (%d, %d)",
        world.grid.width, world.grid.height, player.x, player.y,
    )

    movement = MovementSystem(world)
    sm = SystemsManager()
    sm.register(ChaseSystem(world, player, movement))

    spawner: SpawnSystem | None = None
    if cfg.spawn.enabled:
        spawner = SpawnSystem(
            world,
            rng if rng is not None else random.Random(cfg.spawn.seed),
            glyphs=cfg.spawn.glyphs,
            batch_size=cfg.spawn.batch_size,
            max_retries=cfg.spawn.max_retries,
            max_entities=cfg.spawn.max_entities,
            solid=solid,
        )

    game = Game(
        config=cfg,
        world=world,
        player=player,
        movement=movement,
        systems_manager=sm,
        scheduler=scheduler if scheduler is not None else Scheduler(),
        spawner=spawner,
    )

    game.scheduler.add_job("logic", cfg.timing.tick_interval, game.tick)
    game.scheduler.add_job("draw", cfg.timing.render_interval, game.draw, run_now=True)
    if spawner is not None:
        game.scheduler.add_job("spawn", cfg.timing.spawn_interval, game.spawn)
    return game


def _run_terminal(game: Game) -> None:
    game.view = TerminalView(game.config.display.cell_separator, game.config.display.glyph_colours)
    reader = KeyReader()
    reader.start()
    try:
        while game.state["running"]:
            for key in reader.poll_keys():
                game.handle_key(key)
                game.draw()
                if not game.state["running"]:
                    break
            if not game.state["running"]:
                break
            game.scheduler.run_pending()
            game.scheduler.sleep_until_next(max_wait=reader.poll_interval)
    finally:
        reader.stop()


def _run_pygame(game: Game) -> None:
    import pygame

    from .gui import input as gui_input
    from .gui.renderer import Renderer

    pygame.init()
    game.view = Renderer(
        cell_size=game.config.display.cell_size,
        glyph_colours=game.config.display.glyph_colours,
    )
    clock = pygame.time.Clock()
    try:
        while game.state["running"]:
            gui_input.handle_events(game.world, game.player, game.state, game.movement)
            if not game.state["running"]:
                break
            game.scheduler.run_pending()
            clock.tick(60)
    finally:
        if pygame.get_init():
            pygame.quit()


def run(game: Game, mode: str | None = None) -> None:
    """Drive ``game`` until the player quits."""

    mode = mode or game.config.display.mode
    logger.info("Application started in %s mode.", mode)
    try:
        if mode == "pygame":
            _run_pygame(game)
        elif mode == "terminal":
            _run_terminal(game)
        else:
            raise ValueError(f"Unknown display mode: {mode!r}")
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt caught. Shutting down...")
    finally:
        logger.info("Application shutting down (collected %s).", game.state.get("collected", 0))


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Tile world: walk around and collect things")
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="Path to config.yaml")
    parser.add_argument(
        "--display", choices=["terminal", "pygame"], default=None,
        help="Override display.mode from the config",
    )
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    configure_logging(cfg.logging)
    game = bootstrap(cfg)
    mode = args.display or cfg.display.mode
    run(game, mode)
    if mode == "terminal":
        # Leave the prompt below the last frame
        print()


if __name__ == "__main__":
    main()
