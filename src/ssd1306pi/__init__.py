"""SSD1306 I2C OLED display driver."""

from ssd1306pi.display import SSD1306Display
from ssd1306pi.emulator import PanelEmulator
from ssd1306pi.errors import ConfigurationError, DisposedError, SSD1306Error
from ssd1306pi.font import TextCompositor, get_font_atlas
from ssd1306pi.framebuffer import Framebuffer
from ssd1306pi.models import DisplayModel, DisplayState, VccSourceMode
from ssd1306pi.transport import I2CTransport, Transport

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "DisplayModel",
    "DisplayState",
    "DisposedError",
    "Framebuffer",
    "I2CTransport",
    "PanelEmulator",
    "SSD1306Display",
    "SSD1306Error",
    "TextCompositor",
    "Transport",
    "VccSourceMode",
    "get_font_atlas",
]
