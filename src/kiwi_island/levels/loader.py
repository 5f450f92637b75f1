from __future__ import annotations

import json
import logging
import os
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List

import yaml
from jsonschema import Draft202012Validator
from pydantic import ValidationError

from ..errors import LevelLoadError
from .models import LevelDescription

logger = logging.getLogger(__name__)

_SCHEMA_PKG = "kiwi_island.levels.schemas"
_SCHEMA_FILE = "level.schema.json"

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)
TEXT_SUFFIXES = (".txt",)
LEVEL_SUFFIXES = YAML_SUFFIXES + JSON_SUFFIXES + TEXT_SUFFIXES

_DELIMITER = re.compile(r"\s*,\s*")


@lru_cache(maxsize=1)
def _load_level_schema() -> Dict[str, Any]:
    """Load the bundled level JSON schema; cached since the schema is static."""
    with resources.files(_SCHEMA_PKG).joinpath(_SCHEMA_FILE).open("rb") as fh:
        logger.debug("Loading level schema from package %s", _SCHEMA_PKG)
        return json.load(fh)


def validate_level_dict(data: Any) -> None:
    """Validate a raw level mapping against the level JSON schema.

    Raises:
        LevelLoadError listing every schema violation.
    """
    validator = Draft202012Validator(_load_level_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        details = []
        for err in errors:
            path = "/".join(str(p) for p in err.path) or "<root>"
            logger.error("Level schema validation error at %s: %s", path, err.message)
            details.append(f"at {path}: {err.message}")
        raise LevelLoadError("Level failed schema validation", details)


def parse_level(data: Any) -> LevelDescription:
    """Schema-validate a raw mapping and build the typed level description."""
    validate_level_dict(data)
    try:
        return LevelDescription.model_validate(data)
    except ValidationError as exc:
        details = [
            f"at {'/'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
        ]
        raise LevelLoadError("Level is inconsistent", details) from exc


def parse_legacy_text(text: str) -> Dict[str, Any]:
    """Convert the legacy comma-separated island format into a level mapping.

    Layout: ``rows, columns, <terrain row> x rows, player name, row, column,
    max stamina, max weight, max size, occupant count`` followed by one record
    per occupant: ``kind, name, description, row, column`` plus ``weight, size``
    for tools, ``weight, size, energy`` for food and ``impact`` for hazards.
    """
    tokens = [t for t in _DELIMITER.split(text.strip()) if t != ""]
    cursor = 0

    def take(label: str) -> str:
        nonlocal cursor
        if cursor >= len(tokens):
            raise LevelLoadError("Unexpected end of level data", [f"while reading {label}"])
        token = tokens[cursor]
        cursor += 1
        return token

    def take_int(label: str) -> int:
        token = take(label)
        try:
            return int(token)
        except ValueError as exc:
            raise LevelLoadError("Malformed level data", [f"{label}: expected integer, got {token!r}"]) from exc

    def take_float(label: str) -> float:
        token = take(label)
        try:
            return float(token)
        except ValueError as exc:
            raise LevelLoadError("Malformed level data", [f"{label}: expected number, got {token!r}"]) from exc

    rows = take_int("rows")
    columns = take_int("columns")
    terrain = [take(f"terrain row {r}") for r in range(rows)]
    player = {
        "name": take("player name"),
        "row": take_int("player row"),
        "column": take_int("player column"),
        "max_stamina": take_float("player max stamina"),
        "max_backpack_weight": take_float("player max backpack weight"),
        "max_backpack_size": take_float("player max backpack size"),
    }
    occupants: List[Dict[str, Any]] = []
    for index in range(take_int("occupant count")):
        label = f"occupant {index}"
        occ: Dict[str, Any] = {
            "kind": take(f"{label} kind"),
            "name": take(f"{label} name"),
            "description": take(f"{label} description"),
            "row": take_int(f"{label} row"),
            "column": take_int(f"{label} column"),
        }
        if occ["kind"] in ("T", "E"):
            occ["weight"] = take_float(f"{label} weight")
            occ["size"] = take_float(f"{label} size")
        if occ["kind"] == "E":
            occ["energy"] = take_float(f"{label} energy")
        if occ["kind"] == "H":
            occ["impact"] = take_float(f"{label} impact")
        occupants.append(occ)

    if cursor != len(tokens):
        logger.warning("Ignoring %d trailing tokens in level data", len(tokens) - cursor)
    return {"rows": rows, "columns": columns, "terrain": terrain, "player": player, "occupants": occupants}


def load_level(path: os.PathLike | str) -> LevelDescription:
    """Read a level file (YAML, JSON or the legacy text format) and validate it.

    Raises:
        LevelLoadError: if the file is missing, unreadable or invalid.
    """
    p = Path(path)
    logger.debug("Loading level: %s", p)
    if not p.exists():
        raise LevelLoadError(f"Level file not found: {p}")
    suffix = p.suffix.lower()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise LevelLoadError(f"Unable to read level file: {p}", [str(exc)]) from exc

    if suffix in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise LevelLoadError(f"Invalid YAML in {p}", [str(exc)]) from exc
    elif suffix in JSON_SUFFIXES:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LevelLoadError(f"Invalid JSON in {p}", [f"line {exc.lineno} col {exc.colno}: {exc.msg}"]) from exc
    elif suffix in TEXT_SUFFIXES:
        data = parse_legacy_text(text)
    else:
        raise LevelLoadError(f"Unsupported level format: {p.suffix or '<none>'}")

    level = parse_level(data)
    if not level.name:
        level = level.model_copy(update={"name": p.stem})
    logger.info("Loaded level '%s' (%dx%d, %d occupants)", level.name, level.rows, level.columns, len(level.occupants))
    return level


def load_bundled_level(filename: str = "island.yaml") -> LevelDescription:
    """Load one of the levels shipped inside the package."""
    with resources.as_file(resources.files("kiwi_island.data.levels").joinpath(filename)) as path:
        return load_level(path)


__all__ = [
    "LEVEL_SUFFIXES",
    "load_bundled_level",
    "load_level",
    "parse_legacy_text",
    "parse_level",
    "validate_level_dict",
]
