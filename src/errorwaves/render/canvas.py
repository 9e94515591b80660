from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

Color = Tuple[int, ...]
Point = Tuple[float, float]


class Canvas(ABC):
    """Immediate-mode 2D drawing host used by the frame renderer."""

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        ...

    @abstractmethod
    def clear(self, color: Color) -> None:
        ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color, radius: int = 0) -> None:
        ...

    @abstractmethod
    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: Color, width: int, radius: int = 0
    ) -> None:
        ...

    @abstractmethod
    def polyline(self, points: Sequence[Point], color: Color, width: int) -> None:
        ...

    @abstractmethod
    def set_clip(self, x: float, y: float, w: float, h: float) -> None:
        ...

    @abstractmethod
    def reset_clip(self) -> None:
        ...

    @abstractmethod
    def text_width(self, text: str, size: int, bold: bool = False) -> float:
        ...

    @abstractmethod
    def text(
        self,
        text: str,
        x: float,
        y: float,
        size: int,
        color: Color,
        bold: bool = False,
        align: str = "left",
        baseline: str = "center",
    ) -> None:
        """Draw text anchored at (x, y); align is left/right, baseline is center/bottom."""
        ...
