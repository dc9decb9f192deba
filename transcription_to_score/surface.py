"""Drawing surfaces for the rasterizer.

``DrawingSurface`` is the small set of path, shape and text primitives the
rasterizer needs. ``RasterSurface`` implements it on a NumPy RGB array using
OpenCV, so a score can be painted and encoded without a GUI toolkit. Other
backends (vector output, a GUI canvas) only need to implement the same
methods.
"""

import logging
import math
from abc import ABC, abstractmethod

import cv2
import numpy as np

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]
BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)

# Fixed-point bits for sub-pixel coordinates passed to OpenCV.
_SHIFT = 4
_SCALE = 1 << _SHIFT

# Points used to flatten one cubic Bézier segment.
_BEZIER_STEPS = 16

_FONT = cv2.FONT_HERSHEY_SIMPLEX


class DrawingSurface(ABC):
    """Abstract drawing capability consumed by the rasterizer.

    Paths are built with ``begin_path``/``move_to``/``line_to``/
    ``bezier_curve_to`` and then painted with ``stroke`` or ``fill``.
    Coordinates are floats in surface pixels, origin top-left.
    """

    @property
    @abstractmethod
    def width(self) -> int: ...

    @property
    @abstractmethod
    def height(self) -> int: ...

    @abstractmethod
    def fill_rect(
        self, x: float, y: float, w: float, h: float, color: Color = WHITE
    ) -> None: ...

    @abstractmethod
    def begin_path(self) -> None: ...

    @abstractmethod
    def move_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None: ...

    @abstractmethod
    def bezier_curve_to(
        self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float
    ) -> None: ...

    @abstractmethod
    def close_path(self) -> None: ...

    @abstractmethod
    def stroke(self, line_width: float = 1.0, color: Color = BLACK) -> None: ...

    @abstractmethod
    def fill(self, color: Color = BLACK) -> None: ...

    @abstractmethod
    def ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        rotation: float = 0.0,
        *,
        filled: bool = True,
        line_width: float = 1.0,
        color: Color = BLACK,
    ) -> None: ...

    @abstractmethod
    def text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        size: int = 16,
        bold: bool = False,
        align: str = "left",
        color: Color = BLACK,
    ) -> None: ...

    @abstractmethod
    def to_image(self) -> np.ndarray:
        """Return the painted surface as an H×W×3 RGB uint8 array."""


def _fixed(value: float) -> int:
    return int(round(value * _SCALE))


def _thickness(line_width: float) -> int:
    return max(1, int(round(line_width)))


def _flatten_bezier(
    p0: tuple[float, float],
    c1: tuple[float, float],
    c2: tuple[float, float],
    p3: tuple[float, float],
    steps: int = _BEZIER_STEPS,
) -> list[tuple[float, float]]:
    """Sample a cubic Bézier, excluding its start point."""
    t = np.linspace(0.0, 1.0, steps + 1)[1:, None]
    pts = (
        (1 - t) ** 3 * np.asarray(p0)
        + 3 * (1 - t) ** 2 * t * np.asarray(c1)
        + 3 * (1 - t) * t**2 * np.asarray(c2)
        + t**3 * np.asarray(p3)
    )
    return [(float(px), float(py)) for px, py in pts]


class RasterSurface(DrawingSurface):
    """OpenCV-backed raster surface.

    Drawing happens in RGB order on an in-memory array. All shapes are
    anti-aliased and placed with sub-pixel precision, and the output is
    deterministic for identical drawing calls.

    Attributes:
        image: The RGB pixel buffer being painted.
    """

    def __init__(self, width: int, height: int, background: Color = WHITE):
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self.image = np.full((height, width, 3), background, np.uint8)
        self._subpaths: list[list[tuple[float, float]]] = []
        self._closed: list[bool] = []

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    # ---------- rectangles ----------
    def fill_rect(self, x, y, w, h, color=WHITE):
        cv2.rectangle(
            self.image,
            (_fixed(x), _fixed(y)),
            (_fixed(x + w), _fixed(y + h)),
            color,
            -1,
            cv2.LINE_8,
            _SHIFT,
        )

    # ---------- paths ----------
    def begin_path(self):
        self._subpaths = []
        self._closed = []

    def move_to(self, x, y):
        self._subpaths.append([(float(x), float(y))])
        self._closed.append(False)

    def _current(self) -> list[tuple[float, float]]:
        if not self._subpaths:
            self.move_to(0.0, 0.0)
        return self._subpaths[-1]

    def line_to(self, x, y):
        self._current().append((float(x), float(y)))

    def bezier_curve_to(self, c1x, c1y, c2x, c2y, x, y):
        current = self._current()
        current.extend(_flatten_bezier(current[-1], (c1x, c1y), (c2x, c2y), (x, y)))

    def close_path(self):
        if self._subpaths:
            self._closed[-1] = True

    def _fixed_polylines(self) -> list[np.ndarray]:
        return [
            np.array([[_fixed(px), _fixed(py)] for px, py in sub], np.int32)
            for sub in self._subpaths
        ]

    def stroke(self, line_width=1.0, color=BLACK):
        for pts, closed in zip(self._fixed_polylines(), self._closed):
            if len(pts) < 2:
                continue
            cv2.polylines(
                self.image,
                [pts],
                closed,
                color,
                _thickness(line_width),
                cv2.LINE_AA,
                _SHIFT,
            )

    def fill(self, color=BLACK):
        polys = [pts for pts in self._fixed_polylines() if len(pts) >= 3]
        if polys:
            cv2.fillPoly(self.image, polys, color, cv2.LINE_AA, _SHIFT)

    # ---------- shapes ----------
    def ellipse(
        self,
        cx,
        cy,
        rx,
        ry,
        rotation=0.0,
        *,
        filled=True,
        line_width=1.0,
        color=BLACK,
    ):
        cv2.ellipse(
            self.image,
            (_fixed(cx), _fixed(cy)),
            (_fixed(rx), _fixed(ry)),
            math.degrees(rotation),
            0,
            360,
            color,
            -1 if filled else _thickness(line_width),
            cv2.LINE_AA,
            _SHIFT,
        )

    # ---------- text ----------
    def text(
        self, x, y, text, *, size=16, bold=False, align="left", color=BLACK
    ):
        thickness = 2 if bold else 1
        scale = cv2.getFontScaleFromHeight(_FONT, int(size), thickness)
        (text_w, _), _ = cv2.getTextSize(text, _FONT, scale, thickness)
        if align == "center":
            x -= text_w / 2
        elif align == "right":
            x -= text_w
        cv2.putText(
            self.image,
            text,
            (int(round(x)), int(round(y))),
            _FONT,
            scale,
            color,
            thickness,
            cv2.LINE_AA,
        )

    def to_image(self) -> np.ndarray:
        return self.image.copy()
