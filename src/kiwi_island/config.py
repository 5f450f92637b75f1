from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import List, Optional

import yaml

from .audio import check_sound_effect

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Tunable game rules.

    - tile_capacity: maximum occupants on one tile.
    - visibility_radius: Manhattan distance revealed around the player.
    - min_required_catch: fraction of predators that must be trapped for a
      kiwi-count win.
    - sound_effects: sound cues the audio capability should enable; each must
      be one of audio.SOUND_EFFECTS.
    """

    tile_capacity: int = 3
    visibility_radius: int = 1
    min_required_catch: float = 0.8
    sound_effects: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.tile_capacity <= 0:
            raise ValueError("tile_capacity must be > 0")
        if self.visibility_radius < 0:
            raise ValueError("visibility_radius must be >= 0")
        if not (0.0 <= self.min_required_catch <= 1.0):
            raise ValueError("min_required_catch must be between 0.0 and 1.0")
        for key in self.sound_effects:
            check_sound_effect(key)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "GameConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "GameConfig":
        """Load config from built-in defaults and an optional user override file.

        If user_path is provided and exists, overlay values onto defaults.
        """
        try:
            with resources.files("kiwi_island.data").joinpath("default_config.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default config not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(GameConfig())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user config from %s", user_path)
            else:
                logger.warning("User config file not found: %s", user_path)

        config = cls._from_dict(cls._deep_merge(default_data, user_data))
        logger.debug("Config merged: %s", config)
        return config

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved config to %s", path)
