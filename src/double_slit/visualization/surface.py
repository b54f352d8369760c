"""CPU raster surface with canvas-style drawing primitives.

Pixels live in an (height, width, 3) float32 array in 0..255. All x
coordinates passed to the drawing calls are in unscaled simulation
space and are multiplied by x_scale, the way a 2D canvas context with a
horizontal scale transform behaves. Alpha blending is source-over.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from double_slit.utils.types import Color

RGB = tuple[int, int, int]


def _split_color(color: Color | RGB) -> tuple[NDArray[np.float32], float]:
    if isinstance(color, Color):
        return np.asarray(color.rgb, dtype=np.float32), float(color.alpha)
    return np.asarray(color, dtype=np.float32), 1.0


class Surface:
    """Fixed-size drawable pixel buffer."""

    def __init__(self, width: int, height: int, background: RGB = (0, 0, 0)) -> None:
        self.width = width
        self.height = height
        self.x_scale: float = 1.0
        self.pixels = np.zeros((height, width, 3), dtype=np.float32)
        self.fill(background)

        # Pixel-center coordinates, reused by the shape rasterizers
        self._px = np.arange(width, dtype=np.float32) + 0.5
        self._py = np.arange(height, dtype=np.float32) + 0.5

    def fill(self, color: RGB) -> None:
        self.pixels[:, :] = np.asarray(color, dtype=np.float32)

    def _x_span(self, x: float, w: float) -> tuple[int, int]:
        x0 = int(round(x * self.x_scale))
        x1 = int(round((x + w) * self.x_scale))
        if w > 0:
            x1 = max(x1, x0 + 1)
        return max(x0, 0), min(x1, self.width)

    def _y_span(self, y: float, h: float) -> tuple[int, int]:
        y0 = int(np.floor(y))
        y1 = int(np.floor(y + h)) if h > 1 else y0 + 1
        return max(y0, 0), min(y1, self.height)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color | RGB) -> None:
        """Fill an axis-aligned rectangle, blending by the color's alpha."""
        x0, x1 = self._x_span(x, w)
        y0, y1 = self._y_span(y, h)
        if x0 >= x1 or y0 >= y1:
            return
        rgb, alpha = _split_color(color)
        region = self.pixels[y0:y1, x0:x1]
        region *= 1.0 - alpha
        region += rgb * alpha

    def fill_circle(self, cx: float, cy: float, radius: float, color: Color | RGB) -> None:
        """Fill a disc; under a horizontal scale it becomes an ellipse."""
        x0, x1 = self._x_span(cx - radius, 2 * radius)
        y0, y1 = self._y_span(cy - radius, 2 * radius + 1)
        if x0 >= x1 or y0 >= y1:
            return
        sx = self._px[x0:x1] / self.x_scale
        sy = self._py[y0:y1]
        mask = (sx[None, :] - cx) ** 2 + (sy[:, None] - cy) ** 2 <= radius**2
        self.blend(mask.astype(np.float32), color, origin=(x0, y0))

    def blend(
        self,
        coverage: NDArray[np.float32],
        color: Color | RGB,
        origin: tuple[int, int] = (0, 0),
    ) -> None:
        """Blend color through a per-pixel coverage map (0..1) at origin (x, y)."""
        rgb, alpha = _split_color(color)
        x0, y0 = origin
        h, w = coverage.shape
        weight = (coverage * alpha)[:, :, None]
        region = self.pixels[y0:y0 + h, x0:x0 + w]
        region *= 1.0 - weight
        region += rgb * weight

    def scaled_x_coords(self) -> NDArray[np.float32]:
        """Simulation-space x of every pixel column center."""
        return self._px / self.x_scale

    def y_coords(self) -> NDArray[np.float32]:
        return self._py

    def blit(self, source: Surface) -> None:
        """Copy source pixels onto this surface (same size)."""
        if source.pixels.shape != self.pixels.shape:
            raise ValueError(
                f"cannot blit {source.pixels.shape} onto {self.pixels.shape}"
            )
        np.copyto(self.pixels, source.pixels)

    def to_rgb8(self) -> NDArray[np.uint8]:
        return np.clip(np.rint(self.pixels), 0, 255).astype(np.uint8)

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Device-pixel color at column x, row y."""
        r, g, b = self.to_rgb8()[y, x]
        return (int(r), int(g), int(b))
