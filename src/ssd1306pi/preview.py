"""Pygame desktop preview of an emulated SSD1306 panel."""

from __future__ import annotations

import logging

import pygame
from PIL import Image

from ssd1306pi.emulator import PanelEmulator
from ssd1306pi.protocol import CONTROL_DATA

logger = logging.getLogger(__name__)


class PreviewWindow:
    """Manages the Pygame window that shows the emulated panel."""

    def __init__(self, width: int, height: int, scale: int = 4) -> None:
        """Open a window sized to the panel.

        Args:
            width: Panel width in pixels.
            height: Panel height in pixels.
            scale: Integer zoom factor. Each panel pixel becomes a
                scale x scale block so small panels are readable.
        """
        pygame.init()
        self.scale = max(1, scale)
        self.width = width * self.scale
        self.height = height * self.scale
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(f"SSD1306 {width}x{height}")
        logger.info("Pygame preview initialized (%dx%d, scale %d)", width, height, self.scale)

    def update(self, pil_image: Image.Image) -> None:
        """Convert a PIL Image to a Pygame surface and display it."""
        # Pygame has no 8-bit grayscale surface format, expand to RGB
        rgb = pil_image.convert("RGB")
        if rgb.size != (self.width, self.height):
            rgb = rgb.resize((self.width, self.height), Image.Resampling.NEAREST)
        surface = pygame.image.frombytes(rgb.tobytes(), rgb.size, rgb.mode)
        self.screen.blit(surface, (0, 0))
        pygame.display.flip()

    def handle_events(self) -> bool:
        """Process Pygame events. Returns False if the preview should close."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Received QUIT event")
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logger.info("Received ESC keypress")
                return False
        return True

    def close(self) -> None:
        """Shut down the Pygame display."""
        logger.info("Closing Pygame preview")
        pygame.quit()


class PreviewTransport(PanelEmulator):
    """Emulated panel that mirrors itself into a PreviewWindow.

    The window is repainted after every data write and after commands that
    change what the panel shows (on/off, contrast, inversion).
    """

    def __init__(self, width: int = 128, height: int = 64, scale: int = 4) -> None:
        super().__init__(width, height)
        self.window = PreviewWindow(width, height, scale)
        self.refresh()

    def refresh(self) -> None:
        self.window.update(self.to_image(self.window.scale))

    def write(self, control: int, payload: bytes) -> None:
        super().write(control, payload)
        # Argument bytes arrive in separate writes; repaint once a command is complete
        if control == CONTROL_DATA or not self._pending:
            self.refresh()

    def handle_events(self) -> bool:
        return self.window.handle_events()

    def close(self) -> None:
        if not self.closed:
            self.window.close()
        super().close()
