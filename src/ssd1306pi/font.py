"""Fixed-width bitmap font atlas and text composition.

The atlas is built once per process from the embedded glyph table and is
never modified afterwards, so any number of displays and threads can read
it concurrently.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from PIL import Image

from ssd1306pi.glyphs import GLYPH_HEIGHT, GLYPH_WIDTH, GLYPHS

logger = logging.getLogger(__name__)

# One cell per byte value
ATLAS_CELLS = 256
# Lit glyph pixels in the atlas ("1" mode stores on as 255)
_ON = 255


class FontAtlas:
    """Horizontal strip of glyph cells, cell N drawn for byte value N."""

    def __init__(self, image: Image.Image, glyph_width: int, glyph_height: int) -> None:
        if image.size != (ATLAS_CELLS * glyph_width, glyph_height):
            raise ValueError(
                f"Atlas image is {image.size[0]}x{image.size[1]}, expected "
                f"{ATLAS_CELLS * glyph_width}x{glyph_height}"
            )
        self._image = image
        self.glyph_width = glyph_width
        self.glyph_height = glyph_height

    @classmethod
    def from_glyphs(
        cls,
        glyphs: dict[str, bytes],
        glyph_width: int = GLYPH_WIDTH,
        glyph_height: int = GLYPH_HEIGHT,
    ) -> FontAtlas:
        """Rasterize column-byte glyphs (top pixel in the LSB) into an atlas.

        Byte values without a glyph stay blank.
        """
        image = Image.new("1", (ATLAS_CELLS * glyph_width, glyph_height), 0)
        pixels = image.load()
        for char, columns in glyphs.items():
            left = ord(char) * glyph_width
            for column, bits in enumerate(columns[:glyph_width]):
                for row in range(glyph_height):
                    if (bits >> row) & 1:
                        pixels[left + column, row] = _ON
        return cls(image, glyph_width, glyph_height)

    def glyph(self, code: int) -> Image.Image:
        """Copy of the cell for byte value `code`."""
        if not 0 <= code < ATLAS_CELLS:
            raise IndexError(f"Glyph index out of range: {code}")
        left = code * self.glyph_width
        return self._image.crop((left, 0, left + self.glyph_width, self.glyph_height))


_atlas: FontAtlas | None = None
_atlas_lock = threading.Lock()


def get_font_atlas() -> FontAtlas:
    """Return the process-wide atlas, building it on first use."""
    global _atlas
    if _atlas is None:
        with _atlas_lock:
            # Re-check: another thread may have built it while we waited
            if _atlas is None:
                _atlas = FontAtlas.from_glyphs(GLYPHS)
                logger.debug(
                    "Font atlas loaded (%d glyphs, %dx%d cells)",
                    len(GLYPHS), GLYPH_WIDTH, GLYPH_HEIGHT,
                )
    return _atlas


class TextCompositor:
    """Paints ASCII text into Pillow images using a FontAtlas."""

    def __init__(self, atlas: FontAtlas | None = None) -> None:
        self.atlas = atlas if atlas is not None else get_font_atlas()

    @property
    def glyph_width(self) -> int:
        return self.atlas.glyph_width

    @property
    def glyph_height(self) -> int:
        return self.atlas.glyph_height

    def render_text(self, text: str) -> Image.Image:
        """Render one line of text as a black-background "1" mode image.

        Characters outside ASCII are drawn as '?'. The image is exactly
        len(text) glyphs wide and one glyph high.
        """
        codes = text.encode("ascii", errors="replace")
        image = Image.new("1", (len(codes) * self.glyph_width, self.glyph_height), 0)
        for index, code in enumerate(codes):
            image.paste(self.atlas.glyph(code), (index * self.glyph_width, 0))
        return image

    def draw_lines(self, target: Image.Image, lines: Iterable[str]) -> Image.Image:
        """Overwrite `target` with one rendered line per glyph row, top-left aligned.

        Text that does not fit is clipped at the target's edges.
        """
        if target is None:
            raise ValueError("target surface must not be None")
        for index, line in enumerate(lines):
            if not line:
                continue
            target.paste(self.render_text(line), (0, index * self.glyph_height))
        return target
