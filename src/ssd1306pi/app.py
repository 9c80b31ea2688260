"""Application orchestrator: open a backend, draw the configured content, hold."""

from __future__ import annotations

import logging
import signal
import time
from pathlib import Path

from PIL import Image

from ssd1306pi.config import Config
from ssd1306pi.display import SSD1306Display
from ssd1306pi.emulator import PanelEmulator
from ssd1306pi.errors import ConfigurationError
from ssd1306pi.models import DisplayModel, VccSourceMode
from ssd1306pi.transport import Transport

logger = logging.getLogger(__name__)


def draw_content(display: SSD1306Display, config: Config) -> None:
    """Apply panel settings and load the configured image and text.

    The image is placed on a panel-sized black canvas (shifted by the
    configured offsets), text lines are drawn over it, and the canvas is
    thresholded into the framebuffer. Nothing is rendered here.
    """
    if config.display.contrast is not None:
        display.set_contrast(config.display.contrast)
    if config.display.inverted:
        display.set_inverted(True)

    content = config.content
    canvas = Image.new("RGB", (display.width, display.height), (0, 0, 0))
    if content.image:
        with Image.open(content.image) as source:
            canvas.paste(source.convert("RGB"), (-content.offset_x, -content.offset_y))
        logger.info("Loaded image %s", content.image)
    if content.lines:
        columns, rows = display.text_capacity()
        if len(content.lines) > rows or any(len(line) > columns for line in content.lines):
            logger.warning(
                "Text exceeds %d columns x %d rows and will be clipped", columns, rows
            )
        display.draw_text(canvas, *content.lines)
    display.load_image(canvas, content.threshold)


def render_to_file(config: Config) -> str:
    """Draw the configured content on an emulated panel and save it as PNG.

    Returns:
        Path of the written file.
    """
    emulator = PanelEmulator.for_model(config.display.model)
    with SSD1306Display(
        emulator,
        config.display.model,
        config.display.vcc_source,
        workers=config.content.workers,
    ) as display:
        draw_content(display, config)
        display.render()
        # Capture before close() switches the emulated panel off
        image = emulator.to_image(config.preview.scale)

    output = Path(config.output)
    if output.parent != Path("."):
        output.parent.mkdir(parents=True, exist_ok=True)
    image.save(output)
    logger.info("Saved emulated panel to %s", output)
    return str(output)


class OledApp:
    """Shows the configured content on the selected backend until told to stop."""

    def __init__(self, config: Config) -> None:
        """Validate the panel configuration.

        Model and power mode are checked here, before a bus or window is
        opened, so a bad config never leaves a transport behind.

        Args:
            config: Fully assembled application configuration.
        """
        self.config = config
        self.model = DisplayModel.parse(config.display.model)
        self.vcc_source = VccSourceMode.parse(config.display.vcc_source)
        self.frame_interval = 1.0 / max(1, config.preview.fps)
        self._running = False

    def _open_transport(self) -> Transport:
        """Open the backend selected by config.display.mode.

        Lazy imports: smbus2 is only needed for "i2c", pygame only for
        "pygame".
        """
        mode = self.config.display.mode
        if mode == "i2c":
            from ssd1306pi.transport import I2CTransport
            return I2CTransport(bus=self.config.display.bus, address=self.config.display.address)
        if mode == "pygame":
            from ssd1306pi.preview import PreviewTransport
            return PreviewTransport(
                self.model.width, self.model.height, scale=self.config.preview.scale
            )
        raise ConfigurationError(f"Invalid display mode {mode!r} (supported: i2c, pygame)")

    def _hold(self, transport: Transport) -> None:
        """Keep the content visible for hold_seconds, or until stopped."""
        hold = self.config.hold_seconds
        deadline = time.time() + hold if hold > 0 else None
        handle_events = getattr(transport, "handle_events", None)
        self._running = True
        while self._running:
            if handle_events is not None and not handle_events():
                break
            if deadline is not None and time.time() >= deadline:
                break
            time.sleep(self.frame_interval)

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        """Initialize the panel, show the content, hold, then switch off."""
        signal.signal(signal.SIGTERM, lambda *_: self.stop())
        transport = self._open_transport()
        logger.info(
            "Starting %s display on %s backend", self.model.label, self.config.display.mode
        )
        with SSD1306Display(
            transport, self.model, self.vcc_source, workers=self.config.content.workers
        ) as display:
            draw_content(display, self.config)
            display.render()
            self._hold(transport)
