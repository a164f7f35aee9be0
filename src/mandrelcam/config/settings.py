"""User preferences (persisted to disk)."""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path

from .machine_profiles import LatheModel

DEFAULT_POINT_SPACING = 0.25


@dataclass
class AppSettings:
    """User preferences, serialized to ~/.mandrelcam/settings.json."""

    default_machine: str = LatheModel.OMNITURN.value
    default_stock_diameter: float = 0.5
    point_spacing: float = DEFAULT_POINT_SPACING

    @staticmethod
    def _path() -> Path:
        return Path.home() / ".mandrelcam" / "settings.json"

    @property
    def machine(self) -> LatheModel:
        return LatheModel(self.default_machine)

    def save(self) -> None:
        p = self._path()
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(asdict(self), indent=2))

    @classmethod
    def load(cls) -> "AppSettings":
        p = cls._path()
        if p.exists():
            data = json.loads(p.read_text())
            return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        return cls()
