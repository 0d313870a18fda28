"""JSON payload parsing for adventurer, beast and game-settings snapshots.

Payloads use the client's camelCase keys. ``parse_*`` functions raise
``ValueError`` on malformed mappings; ``load_*`` functions read a JSON file
and return ``None`` (or default settings) when it is missing or unreadable.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from .data import EQUIPMENT_SLOTS, STATS_MODES, STATS_MODE_DODGE
from .models import EMPTY_ITEM, Adventurer, Beast, Equipment, GameSettings, Item, Stats

_STAT_NAMES = ("strength", "dexterity", "vitality", "intelligence", "wisdom", "charisma", "luck")


def _as_int(value: object, name: str, default: Optional[int] = None) -> int:
    if value is None and default is not None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be a number, received {value!r}")
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{name}' must be a number, received {value!r}") from exc


def _read_json(path: str | Path | None) -> Optional[object]:
    if not path:
        return None
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None


def parse_item(raw: object) -> Item:
    if raw is None:
        return EMPTY_ITEM
    if not isinstance(raw, Mapping):
        raise ValueError(f"Item payload must be an object, received {raw!r}")
    item_id = _as_int(raw.get("id"), "id", 0)
    if item_id < 0:
        raise ValueError(f"Item id must not be negative, received {item_id}")
    return Item(id=item_id, xp=max(0, _as_int(raw.get("xp"), "xp", 0)))


def parse_adventurer(raw: Mapping[str, object]) -> Adventurer:
    """Build an :class:`Adventurer` from a client payload.

    Raises
    ------
    ValueError
        If ``health`` is missing or a numeric field cannot be coerced.
    """

    if not isinstance(raw, Mapping):
        raise ValueError("Adventurer payload must be an object")
    if "health" not in raw:
        raise ValueError("Adventurer payload requires 'health'")

    raw_stats = raw.get("stats") or {}
    raw_equipment = raw.get("equipment") or {}
    if not isinstance(raw_stats, Mapping) or not isinstance(raw_equipment, Mapping):
        raise ValueError("'stats' and 'equipment' must be objects")

    stats = Stats(**{name: _as_int(raw_stats.get(name), name, 0) for name in _STAT_NAMES})
    equipment = Equipment(**{slot: parse_item(raw_equipment.get(slot)) for slot in EQUIPMENT_SLOTS})

    return Adventurer(
        health=_as_int(raw["health"], "health"),
        xp=_as_int(raw.get("xp"), "xp", 0),
        stats=stats,
        equipment=equipment,
        item_specials_seed=_as_int(raw.get("itemSpecialsSeed"), "itemSpecialsSeed", 0),
        beast_health=_as_int(raw.get("beastHealth"), "beastHealth", 0),
    )


def parse_beast(raw: Mapping[str, object]) -> Beast:
    if not isinstance(raw, Mapping):
        raise ValueError("Beast payload must be an object")
    for key in ("id", "level", "tier", "health"):
        if key not in raw:
            raise ValueError(f"Beast payload requires '{key}'")

    def optional_name(key: str) -> Optional[str]:
        value = raw.get(key)
        return value if isinstance(value, str) and value else None

    return Beast(
        id=_as_int(raw["id"], "id"),
        level=_as_int(raw["level"], "level"),
        tier=_as_int(raw["tier"], "tier"),
        health=_as_int(raw["health"], "health"),
        special_prefix=optional_name("specialPrefix"),
        special_suffix=optional_name("specialSuffix"),
    )


def parse_game_settings(raw: Mapping[str, object]) -> GameSettings:
    if not isinstance(raw, Mapping):
        raise ValueError("Game settings payload must be an object")
    stats_mode = raw.get("statsMode", STATS_MODE_DODGE)
    if stats_mode not in STATS_MODES:
        raise ValueError(f"Unknown stats mode '{stats_mode}'")
    try:
        reduction = float(raw.get("baseDamageReduction", 0.0) or 0.0)
    except (TypeError, ValueError) as exc:
        raise ValueError("'baseDamageReduction' must be a number") from exc
    return GameSettings(stats_mode=str(stats_mode), base_damage_reduction=reduction)


def load_adventurer(path: str | Path | None) -> Optional[Adventurer]:
    """Load an adventurer snapshot from a JSON file, if present and valid."""

    raw_data = _read_json(path)
    if not isinstance(raw_data, Mapping):
        return None
    try:
        return parse_adventurer(raw_data)
    except ValueError:
        return None


def load_beast(path: str | Path | None) -> Optional[Beast]:
    raw_data = _read_json(path)
    if not isinstance(raw_data, Mapping):
        return None
    try:
        return parse_beast(raw_data)
    except ValueError:
        return None


def load_game_settings(path: str | Path | None) -> GameSettings:
    """Load game settings, falling back to the defaults on any problem."""

    raw_data = _read_json(path)
    if not isinstance(raw_data, Mapping):
        return GameSettings()
    try:
        return parse_game_settings(raw_data)
    except ValueError:
        return GameSettings()
