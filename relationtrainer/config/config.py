from __future__ import annotations

"""Configuration loading and validation for RelationTrainer.

This module loads YAML configuration, applies defaults, and validates
enumerations and ranges. Unreadable or malformed files never stop startup:
a warning is printed and the packaged defaults are used instead.
"""

import sys
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from ..lexicon.symbols import SYMBOL_STYLES
from ..modes.base_mode import Mode

MIN_DEPTH = 2
ALLOWED_MODES = {m.value for m in Mode}
ALLOWED_SYMBOL_STYLES = set(SYMBOL_STYLES)

DEFAULTS_PATH = Path(__file__).with_name("defaults.yml")


def _warn(msg: str) -> None:
    print(f"WARNING: {msg}", file=sys.stderr)


def _load_yaml(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        _warn(f"Config file not found: {path}")
        return None
    except (OSError, yaml.YAMLError) as exc:
        _warn(f"Config file {path} could not be read ({exc})")
        return None
    if not isinstance(data, dict):
        _warn(f"Config file {path} does not hold a mapping")
        return None
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
        if cfg is not None:
            return cfg
        _warn("Using built-in defaults.")
    return _load_yaml(DEFAULTS_PATH) or {}


def _as_int(section: Dict[str, Any], key: str, default: int, minimum: int) -> None:
    try:
        value = int(section.get(key, default))
    except (TypeError, ValueError):
        _warn(f"Invalid {key} '{section.get(key)}', using {default}.")
        value = default
    if value < minimum:
        _warn(f"{key} must be >= {minimum}, using {max(default, minimum)}.")
        value = max(default, minimum)
    section[key] = value


def _as_probability(section: Dict[str, Any], key: str, default: float) -> None:
    try:
        value = float(section.get(key, default))
    except (TypeError, ValueError):
        value = -1.0
    if not 0.0 <= value <= 1.0:
        _warn(f"{key} must be within [0, 1], using {default}.")
        value = default
    section[key] = value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for name in ("modes", "session", "timers", "modifiers", "symbols", "storage"):
        if not isinstance(cfg.get(name), dict):
            if name in cfg:
                _warn(f"Section '{name}' is not a mapping, using defaults.")
            cfg[name] = {}

    modes = cfg["modes"]
    session = cfg["session"]
    timers = cfg["timers"]
    mods = cfg["modifiers"]
    symbols = cfg["symbols"]
    storage = cfg["storage"]

    modes.setdefault("enabled", sorted(ALLOWED_MODES))

    session.setdefault("depth", MIN_DEPTH)
    session.setdefault("auto_progress", True)
    session.setdefault("max_depth", None)
    session.setdefault("scramble_premises", False)

    timers.setdefault("session_enabled", True)
    timers.setdefault("session_seconds", 180)
    timers.setdefault("question_enabled", False)
    timers.setdefault("question_seconds", 30)

    mods.setdefault("blind", False)
    mods.setdefault("cipher", False)
    mods.setdefault("key_change_probability", 0.1)
    mods.setdefault("transformation", False)
    mods.setdefault("deictic", False)
    mods.setdefault("deictic_probability", 0.5)
    mods.setdefault("movement", False)
    mods.setdefault("movement_probability", 0.5)
    mods.setdefault("interference", False)
    mods.setdefault("interference_tick_ms", 600)
    mods.setdefault("interference_hit_delay_ms", 400)

    symbols.setdefault("style", "letters")

    storage.setdefault("history_dir", "./storage/data")
    storage.setdefault("settings_path", "./relationtrainer_settings.json")

    cfg.setdefault("seed", None)

    # Enum validations
    enabled = modes.get("enabled") or []
    if not isinstance(enabled, (list, tuple)):
        _warn(f"modes.enabled must be a list, got '{enabled}'.")
        enabled = sorted(ALLOWED_MODES)
    known = [str(m) for m in enabled if str(m) in ALLOWED_MODES]
    for m in enabled:
        if str(m) not in ALLOWED_MODES:
            _warn(f"Unsupported mode '{m}', ignoring.")
    modes["enabled"] = known

    style = symbols.get("style")
    if style not in ALLOWED_SYMBOL_STYLES:
        _warn(f"Unsupported symbol style '{style}', using 'letters'.")
        symbols["style"] = "letters"

    seed = cfg.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        _warn(f"seed must be an integer, got '{seed}'; ignoring.")
        cfg["seed"] = None

    _as_int(session, "depth", MIN_DEPTH, MIN_DEPTH)
    if session.get("max_depth") is not None:
        _as_int(session, "max_depth", session["depth"], session["depth"])
    _as_int(timers, "session_seconds", 180, 1)
    _as_int(timers, "question_seconds", 30, 1)
    _as_int(mods, "interference_tick_ms", 600, 50)
    _as_int(mods, "interference_hit_delay_ms", 400, 0)
    for key in ("key_change_probability", "deictic_probability", "movement_probability"):
        _as_probability(mods, key, 0.5 if key != "key_change_probability" else 0.1)

    return cfg


_INT_FIELDS = ("depth", "session_seconds", "question_seconds", "interference_tick_ms", "interference_hit_delay_ms")
_BOOL_FIELDS = (
    "auto_progress",
    "scramble_premises",
    "session_timer",
    "question_timer",
    "blind",
    "cipher",
    "transformation",
    "deictic",
    "movement",
    "interference",
)
_PROBABILITY_FIELDS = ("key_change_probability", "deictic_probability", "movement_probability")


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class SessionConfig:
    """Flat, immutable view of the settings a session runs with."""

    enabled_modes: Tuple[str, ...] = tuple(m.value for m in Mode)
    depth: int = MIN_DEPTH
    auto_progress: bool = True
    max_depth: Optional[int] = None
    scramble_premises: bool = False
    session_timer: bool = True
    session_seconds: int = 180
    question_timer: bool = False
    question_seconds: int = 30
    blind: bool = False
    cipher: bool = False
    key_change_probability: float = 0.1
    transformation: bool = False
    deictic: bool = False
    deictic_probability: float = 0.5
    movement: bool = False
    movement_probability: float = 0.5
    interference: bool = False
    interference_tick_ms: int = 600
    interference_hit_delay_ms: int = 400
    symbol_style: str = "letters"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        for name in _INT_FIELDS:
            _require_int(name, getattr(self, name))
        for name in _BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be true or false")
        for name in _PROBABILITY_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{name} must be a number")
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]")
        if self.depth < MIN_DEPTH:
            raise ValueError(f"depth must be >= {MIN_DEPTH}")
        for name in ("session_seconds", "question_seconds", "interference_tick_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.interference_hit_delay_ms < 0:
            raise ValueError("interference_hit_delay_ms must be >= 0")
        if self.max_depth is not None:
            _require_int("max_depth", self.max_depth)
            if self.max_depth < max(MIN_DEPTH, self.depth):
                raise ValueError("max_depth must be >= depth")
        if self.seed is not None:
            _require_int("seed", self.seed)
        if not isinstance(self.enabled_modes, tuple):
            raise TypeError("enabled_modes must be a tuple of mode ids")
        unknown = set(self.enabled_modes) - ALLOWED_MODES
        if unknown:
            raise ValueError(f"Unknown modes: {sorted(unknown)}")
        if self.symbol_style not in ALLOWED_SYMBOL_STYLES:
            raise ValueError(f"Unknown symbol style: {self.symbol_style}")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["enabled_modes"] = list(self.enabled_modes)
        return data

    def with_overrides(self, overrides: Dict[str, Any]) -> "SessionConfig":
        """Copy with the known keys of overrides applied; unknown keys are reported."""
        names = {f.name for f in fields(self)}
        changes = {}
        for key, value in (overrides or {}).items():
            if key not in names:
                _warn(f"Unknown setting '{key}', ignoring.")
                continue
            changes[key] = tuple(value) if key == "enabled_modes" else value
        return replace(self, **changes)

    def modifier_names(self) -> Tuple[str, ...]:
        """Toggled modifiers, in the order history records list them."""
        names = ("blind", "cipher", "deictic", "movement", "interference", "transformation")
        return tuple(n for n in names if getattr(self, n))


def session_config_from(cfg: Dict[str, Any]) -> SessionConfig:
    """Build a SessionConfig from a validated config dict."""
    session = cfg["session"]
    timers = cfg["timers"]
    mods = cfg["modifiers"]
    return SessionConfig(
        enabled_modes=tuple(cfg["modes"]["enabled"]),
        depth=int(session["depth"]),
        auto_progress=bool(session["auto_progress"]),
        max_depth=session.get("max_depth"),
        scramble_premises=bool(session["scramble_premises"]),
        session_timer=bool(timers["session_enabled"]),
        session_seconds=int(timers["session_seconds"]),
        question_timer=bool(timers["question_enabled"]),
        question_seconds=int(timers["question_seconds"]),
        blind=bool(mods["blind"]),
        cipher=bool(mods["cipher"]),
        key_change_probability=float(mods["key_change_probability"]),
        transformation=bool(mods["transformation"]),
        deictic=bool(mods["deictic"]),
        deictic_probability=float(mods["deictic_probability"]),
        movement=bool(mods["movement"]),
        movement_probability=float(mods["movement_probability"]),
        interference=bool(mods["interference"]),
        interference_tick_ms=int(mods["interference_tick_ms"]),
        interference_hit_delay_ms=int(mods["interference_hit_delay_ms"]),
        symbol_style=str(cfg["symbols"]["style"]),
        seed=cfg.get("seed"),
    )
