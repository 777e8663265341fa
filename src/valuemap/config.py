from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

GRID_SIZE_MIN = 5
GRID_SIZE_MAX = 60


class CellShape(str, Enum):
    RECTANGLE = "rectangle"
    CIRCLE = "circle"

    @classmethod
    def parse(cls, name: str) -> "CellShape":
        name = name.strip().lower()
        if name == "square":
            return cls.RECTANGLE
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown cell shape: {name!r}") from None


@dataclass(frozen=True)
class GridConfig:
    columns: int
    rows: int

    def __post_init__(self):
        for name in ("columns", "rows"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"Grid {name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class ScaleConfig:
    min: int
    max: int

    def __post_init__(self):
        for name in ("min", "max"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Scale {name} must be an integer, got {value!r}")
        if self.min > self.max:
            raise ValueError(f"Scale min ({self.min}) is greater than max ({self.max})")


@dataclass(frozen=True)
class Settings:
    grid: GridConfig = field(default_factory=lambda: GridConfig(columns=20, rows=20))
    scale: ScaleConfig = field(default_factory=lambda: ScaleConfig(min=0, max=10))
    cell_shape: CellShape = CellShape.RECTANGLE
    invert: bool = False

    def __post_init__(self):
        # Accept plain strings ("circle", "square") for convenience
        if not isinstance(self.cell_shape, CellShape):
            object.__setattr__(self, "cell_shape", CellShape.parse(self.cell_shape))

    def replace(self, **changes) -> "Settings":
        return dataclasses.replace(self, **changes)


# Presets offered by the interactive front end
GRID_PRESETS = {
    "10x10": GridConfig(columns=10, rows=10),
    "20x20": GridConfig(columns=20, rows=20),
    "30x30": GridConfig(columns=30, rows=30),
}

SCALE_PRESETS = {
    "0-10": ScaleConfig(min=0, max=10),
    "0-20": ScaleConfig(min=0, max=20),
    "0-50": ScaleConfig(min=0, max=50),
}
