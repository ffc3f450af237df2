# roguegrid/settings.py
"""World generation settings.

Defaults live in ``roguegrid/data/worldgen.yaml``; the dataclass defaults
below mirror that file so every generator also works without loading it.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Self

import structlog
import yaml

log = structlog.get_logger()

DATA_DIR = Path(__file__).parent.resolve() / "data"
DEFAULT_SETTINGS_FILE = DATA_DIR / "worldgen.yaml"

# Field types accepted as plain YAML scalars.
_SCALAR_TYPES = (int, float, bool, str)


@dataclass(frozen=True)
class MonsterTemplate:
    weight: float
    glyph: str

    def __post_init__(self) -> None:
        if self.weight <= 0:
            raise ValueError(f"Monster weight must be positive, got {self.weight}")
        if len(self.glyph) != 1:
            raise ValueError(f"Monster glyph must be one character, got {self.glyph!r}")


DEFAULT_MONSTERS: Dict[str, MonsterTemplate] = {
    "orc": MonsterTemplate(weight=80, glyph="o"),
    "troll": MonsterTemplate(weight=20, glyph="T"),
}


@dataclass(frozen=True)
class RoomSettings:
    max_rooms: int = 40
    room_min_size: int = 6
    room_max_size: int = 10
    max_room_monsters: int = 3

    def __post_init__(self) -> None:
        if self.max_rooms < 0:
            raise ValueError("max_rooms must not be negative")
        # A room needs an interior, so at least 2 cells including its outline.
        if self.room_min_size < 2:
            raise ValueError("room_min_size must be at least 2")
        if self.room_min_size > self.room_max_size:
            raise ValueError("room_min_size must not exceed room_max_size")
        if self.max_room_monsters < 0:
            raise ValueError("max_room_monsters must not be negative")


@dataclass(frozen=True)
class CaveSettings:
    empty_chance: float = 0.46
    smoothing_steps: int = 6
    death_limit: int = 3
    birth_limit: int = 4
    desired_monsters: int = 15
    max_spawn_attempts: int = 200

    def __post_init__(self) -> None:
        if not 0.0 <= self.empty_chance <= 1.0:
            raise ValueError("empty_chance must be within [0, 1]")
        if self.smoothing_steps < 0:
            raise ValueError("smoothing_steps must not be negative")
        if not 0 <= self.death_limit <= 8 or not 0 <= self.birth_limit <= 8:
            raise ValueError("death_limit and birth_limit must be within [0, 8]")
        if self.desired_monsters < 0 or self.max_spawn_attempts < 0:
            raise ValueError("spawn caps must not be negative")


@dataclass(frozen=True)
class VisibilitySettings:
    radius: int = 10
    light_walls: bool = True

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError("radius must not be negative")


@dataclass(frozen=True)
class WorldSettings:
    map_width: int = 80
    map_height: int = 45
    max_generation_retries: int = 5
    min_open_tiles: int = 20
    rooms: RoomSettings = field(default_factory=RoomSettings)
    caves: CaveSettings = field(default_factory=CaveSettings)
    visibility: VisibilitySettings = field(default_factory=VisibilitySettings)
    monsters: Dict[str, MonsterTemplate] = field(
        default_factory=lambda: dict(DEFAULT_MONSTERS)
    )

    def __post_init__(self) -> None:
        if self.map_width <= 0 or self.map_height <= 0:
            raise ValueError("map_width and map_height must be positive")
        if self.max_generation_retries < 1:
            raise ValueError("max_generation_retries must be at least 1")
        if not self.monsters:
            raise ValueError("at least one monster template is required")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        sections = {
            "rooms": RoomSettings,
            "caves": CaveSettings,
            "visibility": VisibilitySettings,
        }
        scalars = {f.name: f.type for f in fields(cls) if f.type in _SCALAR_TYPES}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key in sections:
                kwargs[key] = _build_section(sections[key], value, key)
            elif key == "monsters":
                kwargs[key] = _build_monsters(value)
            elif key in scalars:
                kwargs[key] = _check_scalar(value, scalars[key], "world", key)
            else:
                log.warning("Ignoring unknown settings key", key=key)
        return cls(**kwargs)


def _check_scalar(value: Any, expected: type, section: str, key: str) -> Any:
    # bool is an int subclass; YAML booleans must not pass as numbers.
    if expected is bool:
        ok = isinstance(value, bool)
    elif expected is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ValueError(
            f"[{section}] {key} must be {expected.__name__}, got {value!r}"
        )
    return value


def _require_mapping(values: Any, section: str) -> Mapping[str, Any]:
    if values is None:
        return {}
    if not isinstance(values, Mapping):
        raise ValueError(
            f"[{section}] must be a mapping, got {type(values).__name__}"
        )
    return values


def _build_section(section_cls: type, values: Any, name: str):
    types = {f.name: f.type for f in fields(section_cls)}
    values = _require_mapping(values, name)
    unknown = set(values) - set(types)
    if unknown:
        log.warning("Ignoring unknown settings keys", section=name, keys=sorted(unknown))
    return section_cls(
        **{
            k: _check_scalar(v, types[k], name, k)
            for k, v in values.items()
            if k in types
        }
    )


def _build_monsters(values: Any) -> Dict[str, MonsterTemplate]:
    monsters: Dict[str, MonsterTemplate] = {}
    for name, spec in _require_mapping(values, "monsters").items():
        section = f"monsters.{name}"
        spec = _require_mapping(spec, section)
        for key in ("weight", "glyph"):
            if key not in spec:
                raise ValueError(f"[{section}] missing required key {key!r}")
        monsters[str(name)] = MonsterTemplate(
            weight=float(_check_scalar(spec["weight"], float, section, "weight")),
            glyph=_check_scalar(spec["glyph"], str, section, "glyph"),
        )
    return monsters


def load_yaml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Loads a YAML configuration file."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
        )
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        raise ValueError(f"{config_name} config must be a mapping: {config_path}")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data


def load_settings(path: Path | str | None = None) -> WorldSettings:
    """Load :class:`WorldSettings` from ``path`` or the packaged defaults."""
    config_path = Path(path) if path is not None else DEFAULT_SETTINGS_FILE
    return WorldSettings.from_dict(load_yaml_config(config_path, "Worldgen"))
