"""SSD1306 OLED display controller."""

from __future__ import annotations

import logging

from PIL import Image

from ssd1306pi.errors import DisposedError
from ssd1306pi.font import TextCompositor
from ssd1306pi.framebuffer import Framebuffer, RasterSurface
from ssd1306pi.models import DisplayModel, DisplayState, VccSourceMode, default_contrast
from ssd1306pi.protocol import (
    Command,
    CommandProtocol,
    address_window_sequence,
    initialization_sequence,
)
from ssd1306pi.transport import Transport

logger = logging.getLogger(__name__)


class SSD1306Display:
    """Drive an SSD1306 OLED panel through a byte transport.

    Construction sends the full initialization sequence and switches the
    panel on. Drawing happens in an in-memory framebuffer; nothing reaches
    the panel until render() is called.

    The display owns its transport: close() switches the panel off and
    releases the transport exactly once. Use it as a context manager to
    guarantee that on every exit path:

        with SSD1306Display(I2CTransport(), "128x32") as display:
            display.show_text("Hello")
            display.render()

    Instances are not thread-safe. Commands must reach the bus as unbroken
    byte sequences, so all calls on one display have to come from one
    thread or be serialized by the caller.
    """

    def __init__(
        self,
        transport: Transport,
        model: DisplayModel | str,
        vcc_source: VccSourceMode | str = VccSourceMode.SWITCHING,
        workers: int = 1,
    ) -> None:
        """Validate the configuration, initialize the panel and turn it on.

        Args:
            transport: Open transport to the controller. Closed by close(),
                or right away if initialization fails.
            model: Panel form factor, as a DisplayModel or label ("128x64").
            vcc_source: Power source, which selects charge pump, precharge
                and default contrast values.
            workers: Threads used by load_image() to sample images.

        Raises:
            ConfigurationError: Unknown model or power mode. Raised before
                anything is written.
            ValueError: transport is None.
            OSError: A bus write failed during initialization. The transport
                has been closed and the instance must be discarded.
        """
        self.state = DisplayState.UNINITIALIZED
        self.model = DisplayModel.parse(model)
        self.vcc_source = VccSourceMode.parse(vcc_source)
        if transport is None:
            raise ValueError("transport must not be None")

        self.transport = transport
        self.protocol = CommandProtocol(transport)
        self.width = self.model.width
        self.height = self.model.height
        self.page_count = self.model.page_count
        self.workers = workers
        self.framebuffer = Framebuffer(self.width, self.height)
        self._text: TextCompositor | None = None
        self._contrast = 0
        self._inverted = False

        try:
            self.initialize()
            self.set_active(True)
        except Exception:
            logger.warning("Initialization of %s display failed", self.model.label)
            self.state = DisplayState.DISPOSED
            self.transport.close()
            raise
        logger.info(
            "SSD1306 display initialized (%s, %s power, contrast 0x%02X)",
            self.model.label, self.vcc_source.name.lower(), self._contrast,
        )

    def __enter__(self) -> SSD1306Display:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"SSD1306Display(model={self.model.label}, "
            f"vcc_source={self.vcc_source.name}, state={self.state.name})"
        )

    def _ensure_open(self) -> None:
        if self.state is DisplayState.DISPOSED:
            raise DisposedError("Display has been closed")

    def initialize(self) -> None:
        """Send the power-up configuration. Leaves the panel switched off."""
        self._ensure_open()
        contrast = default_contrast(self.model, self.vcc_source)
        self.protocol.send_sequence(
            initialization_sequence(self.model, self.vcc_source, contrast)
        )
        self._contrast = contrast
        self._inverted = False
        self.state = DisplayState.INACTIVE

    # -- Panel properties ----------------------------------------------------

    @property
    def contrast(self) -> int:
        """Last contrast value written to the panel (0-255)."""
        return self._contrast

    def set_contrast(self, value: int) -> None:
        self._ensure_open()
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Contrast must be within 0-255, got {value}")
        self.protocol.send(Command.SET_CONTRAST, value)
        self._contrast = value
        logger.debug("Contrast set to 0x%02X", value)

    @property
    def is_active(self) -> bool:
        """True while the panel is switched on."""
        return self.state is DisplayState.ACTIVE

    def set_active(self, active: bool) -> None:
        """Switch the panel on or off. Display RAM is kept while off."""
        self._ensure_open()
        self.protocol.send(Command.TURN_ON if active else Command.TURN_OFF)
        self.state = DisplayState.ACTIVE if active else DisplayState.INACTIVE
        logger.debug("Display %s", "on" if active else "off")

    @property
    def is_inverted(self) -> bool:
        return self._inverted

    def set_inverted(self, inverted: bool) -> None:
        """Show lit pixels dark and dark pixels lit."""
        self._ensure_open()
        self.protocol.send(
            Command.DISPLAY_MODE_INVERT if inverted else Command.DISPLAY_MODE_NORMAL
        )
        self._inverted = inverted

    def set_entire_display_on(self, enabled: bool) -> None:
        """Light every pixel regardless of RAM content (panel test)."""
        self._ensure_open()
        self.protocol.send(Command.ENTIRE_DISPLAY_ON if enabled else Command.RESUME)

    # -- Framebuffer ---------------------------------------------------------

    def get_pixel(self, x: int, y: int) -> bool:
        self._ensure_open()
        return self.framebuffer.get_pixel(x, y)

    def set_pixel(self, x: int, y: int, value: bool = True) -> None:
        self._ensure_open()
        self.framebuffer.set_pixel(x, y, value)

    def clear_pixels(self) -> None:
        self._ensure_open()
        self.framebuffer.clear()

    def load_image(
        self,
        surface: RasterSurface,
        brightness_threshold: float = 0.5,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> None:
        """Replace the framebuffer with a thresholded image region.

        Pillow images in palette or other non-RGB modes are converted to
        RGB first, which also decodes lazily opened files.
        """
        self._ensure_open()
        if isinstance(surface, Image.Image) and surface.mode not in ("1", "L", "RGB", "RGBA"):
            surface = surface.convert("RGB")
        self.framebuffer.load_from_surface(
            surface, brightness_threshold, offset_x, offset_y, workers=self.workers
        )

    @property
    def text(self) -> TextCompositor:
        if self._text is None:
            self._text = TextCompositor()
        return self._text

    def get_text_image(self, text: str) -> Image.Image:
        """Render one line of text with the built-in bitmap font."""
        self._ensure_open()
        return self.text.render_text(text)

    def draw_text(self, surface: Image.Image, *lines: str) -> Image.Image:
        """Draw text lines onto an existing image, one glyph row per line."""
        self._ensure_open()
        return self.text.draw_lines(surface, lines)

    def show_text(self, *lines: str, brightness_threshold: float = 0.5) -> None:
        """Replace the framebuffer with the given lines of text."""
        self._ensure_open()
        canvas = Image.new("1", (self.width, self.height), 0)
        self.draw_text(canvas, *lines)
        self.load_image(canvas, brightness_threshold)

    def text_capacity(self) -> tuple[int, int]:
        """(columns, rows) of built-in font characters that fit on the panel."""
        self._ensure_open()
        return self.width // self.text.glyph_width, self.height // self.text.glyph_height

    # -- Output --------------------------------------------------------------

    def render(self) -> None:
        """Transmit the framebuffer to the panel's display RAM."""
        self._ensure_open()
        self.protocol.send_sequence(address_window_sequence(self.width, self.page_count))
        self.protocol.send_data(self.framebuffer.pack())
        logger.debug("Rendered %d bytes", len(self.framebuffer))

    def close(self) -> None:
        """Switch the panel off and release the transport. Idempotent."""
        if self.state is DisplayState.DISPOSED:
            return
        try:
            self.set_active(False)
        finally:
            self.state = DisplayState.DISPOSED
            self.transport.close()
            logger.info("SSD1306 display closed")
