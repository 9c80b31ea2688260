"""Packed 1-bit framebuffer in the SSD1306's native page layout.

The controller's display RAM is split into pages of 8 rows. Within a page,
every column is one byte whose least significant bit is the top pixel of
that page. The bit index of pixel (x, y) is therefore

    (y // 8) * (8 * width) + x * 8 + (y % 8)

and the buffer can be streamed to the controller as-is.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Protocol

from ssd1306pi.protocol import CONTROL_DATA

logger = logging.getLogger(__name__)


class RasterSurface(Protocol):
    """Anything that can be sampled pixel by pixel (a Pillow Image fits)."""

    @property
    def size(self) -> tuple[int, int]: ...

    def getpixel(self, xy: tuple[int, int]) -> int | tuple[int, ...]: ...


def _rgb(pixel: int | tuple[int, ...]) -> tuple[int, int, int]:
    """Normalize a sampled pixel to an (R, G, B) triple."""
    if isinstance(pixel, int):
        return pixel, pixel, pixel
    if len(pixel) < 3:
        # Grayscale with alpha ("LA")
        return pixel[0], pixel[0], pixel[0]
    return pixel[0], pixel[1], pixel[2]


class Framebuffer:
    """Width x height bits of pixel state, packed for transmission."""

    def __init__(self, width: int, height: int) -> None:
        """Allocate a cleared framebuffer.

        Args:
            width: Pixel columns. Must be positive.
            height: Pixel rows. Must be a positive multiple of 8 (one page).
        """
        if width <= 0 or height <= 0 or height % 8:
            raise ValueError(
                f"Invalid framebuffer size {width}x{height}: height must be a "
                "positive multiple of 8"
            )
        self.width = width
        self.height = height
        self.page_count = height // 8
        self.bits_per_page = 8 * width
        self._data = bytearray(width * self.page_count)

    def __len__(self) -> int:
        """Size of pack() output: control byte plus pixel data."""
        return 1 + len(self._data)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} framebuffer"
            )

    def bit_index(self, x: int, y: int) -> int:
        """Linear bit position of pixel (x, y) in the packed buffer."""
        self._check_bounds(x, y)
        return (y // 8) * self.bits_per_page + x * 8 + (y % 8)

    def get_pixel(self, x: int, y: int) -> bool:
        index = self.bit_index(x, y)
        return bool((self._data[index >> 3] >> (index & 7)) & 1)

    def set_pixel(self, x: int, y: int, value: bool = True) -> None:
        index = self.bit_index(x, y)
        mask = 1 << (index & 7)
        if value:
            self._data[index >> 3] |= mask
        else:
            self._data[index >> 3] &= ~mask & 0xFF

    def clear(self) -> None:
        """Turn every pixel off. Touches memory only, never the bus."""
        self._data[:] = bytes(len(self._data))

    @property
    def data(self) -> bytes:
        """Copy of the pixel bytes without the control byte."""
        return bytes(self._data)

    def pack(self) -> bytes:
        """Serialize as the controller expects: 0x40 control byte, then pixels."""
        return bytes([CONTROL_DATA]) + bytes(self._data)

    def load_from_surface(
        self,
        surface: RasterSurface | None,
        brightness_threshold: float,
        offset_x: int = 0,
        offset_y: int = 0,
        workers: int = 1,
    ) -> None:
        """Threshold a raster surface into the framebuffer.

        The framebuffer is cleared first. Every destination pixel (px, py)
        samples the source at (offset_x + px, offset_y + py); pure black
        pixels and pixels outside the source stay off, any other pixel is
        turned on when max(R, G, B) / 255 >= brightness_threshold.

        Args:
            surface: Source raster whose pixels are gray levels or RGB(A)
                tuples. A load() method, if present, is called before
                sampling starts.
            brightness_threshold: Inclusive lower bound in [0.0, 1.0].
            offset_x: Source column mapped to framebuffer column 0.
            offset_y: Source row mapped to framebuffer row 0.
            workers: Threads to sample with. Work is split by page so each
                thread writes its own bytes.
        """
        if surface is None:
            raise ValueError("surface must not be None")
        if not 0.0 <= brightness_threshold <= 1.0:
            raise ValueError(
                f"brightness_threshold must be within [0, 1], got {brightness_threshold}"
            )
        # Lazily decoded surfaces (Image.open) must be fully read before
        # several threads sample them
        load = getattr(surface, "load", None)
        if callable(load):
            load()

        self.clear()
        load_page = partial(
            self._load_page, surface, brightness_threshold, offset_x, offset_y
        )
        pages = range(self.page_count)
        if workers <= 1:
            for page in pages:
                load_page(page)
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # list() re-raises the first worker exception here
                list(pool.map(load_page, pages))
        logger.debug(
            "Loaded %dx%d surface at offset (%d, %d), threshold %.2f",
            surface.size[0], surface.size[1], offset_x, offset_y, brightness_threshold,
        )

    def _load_page(
        self,
        surface: RasterSurface,
        threshold: float,
        offset_x: int,
        offset_y: int,
        page: int,
    ) -> None:
        """Sample the 8 rows of one page into their column bytes."""
        src_width, src_height = surface.size
        base = page * self.width
        for bit in range(8):
            sy = offset_y + page * 8 + bit
            if not 0 <= sy < src_height:
                continue
            mask = 1 << bit
            for x in range(self.width):
                sx = offset_x + x
                if not 0 <= sx < src_width:
                    continue
                rgb = _rgb(surface.getpixel((sx, sy)))
                if rgb == (0, 0, 0):
                    continue
                if max(rgb) / 255 >= threshold:
                    self._data[base + x] |= mask
