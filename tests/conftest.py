from typing import List, Sequence, Tuple

import pytest

from errorwaves.render.canvas import Canvas


class RecordingCanvas(Canvas):
    """Canvas that records draw calls instead of rasterising."""

    def __init__(self, width: int, height: int):
        self._size = (width, height)
        self.calls: List[Tuple] = []

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)

    def clear(self, color) -> None:
        self.calls.append(("clear", color))

    def fill_rect(self, x, y, w, h, color, radius=0) -> None:
        self.calls.append(("fill_rect", x, y, w, h, color, radius))

    def stroke_rect(self, x, y, w, h, color, width, radius=0) -> None:
        self.calls.append(("stroke_rect", x, y, w, h, color, width, radius))

    def polyline(self, points: Sequence, color, width) -> None:
        self.calls.append(("polyline", tuple(points), color, width))

    def set_clip(self, x, y, w, h) -> None:
        self.calls.append(("set_clip", x, y, w, h))

    def reset_clip(self) -> None:
        self.calls.append(("reset_clip",))

    def text_width(self, text, size, bold=False) -> float:
        return 0.5 * size * len(text)

    def text(self, text, x, y, size, color, bold=False, align="left", baseline="center") -> None:
        self.calls.append(("text", text, x, y, size, color, bold, align, baseline))

    def of(self, kind: str) -> List[Tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def recording_canvas():
    return RecordingCanvas
