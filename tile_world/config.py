"""Simple configuration loader for tile_world."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"

DEFAULT_MAP: List[str] = [
    "====================",
    "=                  =",
    "=                  =",
    "=                  =",
    "=   ============   =",
    "=   =          =   =",
    "=   =          =   =",
    "=   =          =   =",
    "=   =      **  =   =",
    "=   =      **  =   =",
    "=   =          =   =",
    "=   =          =   =",
    "=   =          =   =",
    "=   ==    ======   =",
    "=                  =",
    "=                  =",
    "=                  =",
    "====================",
]


@dataclass
class WorldConfig:
    """Terrain layout and which symbols block movement."""

    map: List[str] = field(default_factory=lambda: list(DEFAULT_MAP))
    solid_symbols: List[str] = field(default_factory=lambda: ["="])


@dataclass
class PlayerConfig:
    shape: List[str] = field(default_factory=lambda: ["##", "##"])
    start: tuple[int, int] = (1, 1)


@dataclass
class TimingConfig:
    """Periods in seconds for the scheduled phases."""

    tick_interval: float = 0.25
    render_interval: float = 0.25
    spawn_interval: float = 1.0


@dataclass
class SpawnConfig:
    enabled: bool = True
    batch_size: int = 10
    max_retries: int = 100
    glyphs: List[str] = field(default_factory=lambda: ["-", "+", ">", "<", "~"])
    seed: Optional[int] = None
    max_entities: int = 0


@dataclass
class DisplayConfig:
    mode: str = "terminal"
    cell_separator: str = " "
    cell_size: int = 24
    glyph_colours: Dict[str, str] = field(default_factory=dict)


@dataclass
class LoggingConfig:
    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)
    file: Optional[str] = None


@dataclass
class Config:
    """Top level configuration dataclass."""

    world: WorldConfig = field(default_factory=WorldConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        logger.warning("Config section '%s' is not a mapping; using defaults.", name)
        return {}
    return value


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    world_data = _section(data, "world")
    solid_symbols = world_data.get("solid_symbols")
    world = WorldConfig(
        map=[str(line) for line in world_data.get("map") or DEFAULT_MAP],
        solid_symbols=[str(s) for s in (["="] if solid_symbols is None else solid_symbols)],
    )

    player_data = _section(data, "player")
    player = PlayerConfig(
        shape=[str(line) for line in player_data.get("shape") or ["##", "##"]],
        start=tuple(int(v) for v in player_data.get("start") or [1, 1]),
    )

    timing_data = _section(data, "timing")
    timing = TimingConfig(
        tick_interval=float(timing_data.get("tick_interval", 0.25)),
        render_interval=float(timing_data.get("render_interval", 0.25)),
        spawn_interval=float(timing_data.get("spawn_interval", 1.0)),
    )

    spawn_data = _section(data, "spawn")
    seed = spawn_data.get("seed")
    spawn = SpawnConfig(
        enabled=bool(spawn_data.get("enabled", True)),
        batch_size=int(spawn_data.get("batch_size", 10)),
        max_retries=int(spawn_data.get("max_retries", 100)),
        glyphs=[str(g) for g in spawn_data.get("glyphs") or ["-", "+", ">", "<", "~"]],
        seed=int(seed) if seed is not None else None,
        max_entities=int(spawn_data.get("max_entities", 0)),
    )

    display_data = _section(data, "display")
    display = DisplayConfig(
        mode=str(display_data.get("mode", "terminal")),
        cell_separator=str(display_data.get("cell_separator", " ")),
        cell_size=int(display_data.get("cell_size", 24)),
        glyph_colours={str(k): str(v) for k, v in (display_data.get("glyph_colours") or {}).items()},
    )

    logging_data = _section(data, "logging")
    log_cfg = LoggingConfig(
        global_level=str(logging_data.get("global_level", "INFO")).upper(),
        module_levels={str(k): str(v) for k, v in (logging_data.get("module_levels") or {}).items()},
        file=logging_data.get("file"),
    )

    return Config(
        world=world, player=player, timing=timing, spawn=spawn, display=display, logging=log_cfg
    )


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        raw = {}
    if not isinstance(raw, dict):
        logger.warning("Config file %s does not contain a mapping; using defaults.", path)
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "CONFIG_PATH",
    "Config",
    "DEFAULT_MAP",
    "DisplayConfig",
    "LoggingConfig",
    "PlayerConfig",
    "SpawnConfig",
    "TimingConfig",
    "WorldConfig",
    "load_config",
]
