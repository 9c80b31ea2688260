"""Display models, power modes and controller states."""

from __future__ import annotations

import math
from enum import Enum

from ssd1306pi.errors import ConfigurationError


class DisplayModel(Enum):
    """One of the three SSD1306 panel form factors.

    Each member carries the constants the controller needs for that panel
    directly, so there is no separate per-model lookup table.

    Attributes:
        label: Human-readable "WIDTHxHEIGHT" name used in config files and
            on the command line.
        width: Panel width in pixels (number of segment columns).
        height: Panel height in pixels (number of COM rows).
        clock_divider: Argument byte for SetClockDivider (0xD5). High nibble
            is the oscillator frequency, low nibble the divide ratio.
        multiplexer: Argument byte for SetMultiplexer (0xA8), i.e. the number
            of active COM rows minus one.
        com_pins: Argument byte for SetComPins (0xDA). 0x12 selects the
            alternative COM pin layout wired on 64-row panels.
    """

    DISPLAY_128X64 = ("128x64", 128, 64, 0x80, 0x3F, 0x12)
    DISPLAY_128X32 = ("128x32", 128, 32, 0x80, 0x1F, 0x02)
    DISPLAY_96X16 = ("96x16", 96, 16, 0x60, 0x0F, 0x02)

    def __init__(
        self,
        label: str,
        width: int,
        height: int,
        clock_divider: int,
        multiplexer: int,
        com_pins: int,
    ) -> None:
        self.label = label
        self.width = width
        self.height = height
        self.clock_divider = clock_divider
        self.multiplexer = multiplexer
        self.com_pins = com_pins

    @property
    def page_count(self) -> int:
        """Number of 8-row pages in the controller's display RAM."""
        return self.height // 8

    @property
    def bits_per_page(self) -> int:
        """Bits in one page: every column contributes one 8-pixel byte."""
        return 8 * self.width

    @property
    def buffer_size(self) -> int:
        """Length of a packed framebuffer including the leading control byte."""
        return 1 + math.ceil(self.width * self.height / 8)

    @classmethod
    def parse(cls, value: DisplayModel | str) -> DisplayModel:
        """Resolve a member or a label such as "128x64" to a DisplayModel.

        Raises:
            ConfigurationError: If the value names no supported model.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for model in cls:
                if wanted in (model.label, model.name.lower()):
                    return model
        supported = ", ".join(m.label for m in cls)
        raise ConfigurationError(
            f"Invalid display model {value!r} (supported: {supported})"
        )


class VccSourceMode(Enum):
    """Where the panel's high-voltage supply comes from."""

    # Supply provided on the VCC pin by the board
    EXTERNAL = 0x1
    # Internal switching-capacitor charge pump
    SWITCHING = 0x2

    @property
    def charge_pump(self) -> int:
        """Argument byte for SetChargePumpMode (0x8D)."""
        match self:
            case VccSourceMode.EXTERNAL:
                return 0x10
            case VccSourceMode.SWITCHING:
                return 0x14

    @property
    def precharge(self) -> int:
        """Argument byte for SetPrechargeMode (0xD9): phase 1/2 periods."""
        match self:
            case VccSourceMode.EXTERNAL:
                return 0x22
            case VccSourceMode.SWITCHING:
                return 0xF1

    @classmethod
    def parse(cls, value: VccSourceMode | str) -> VccSourceMode:
        """Resolve a member or its name ("external", "switching")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        supported = ", ".join(m.name.lower() for m in cls)
        raise ConfigurationError(
            f"Invalid VCC source mode {value!r} (supported: {supported})"
        )


def default_contrast(model: DisplayModel, vcc_source: VccSourceMode) -> int:
    """Contrast written during initialization for a model/power combination."""
    match model, vcc_source:
        case DisplayModel.DISPLAY_128X64, VccSourceMode.EXTERNAL:
            return 0x9F
        case DisplayModel.DISPLAY_128X64, VccSourceMode.SWITCHING:
            return 0xCF
        case _:
            return 0x8F


class DisplayState(Enum):
    """Lifecycle of an SSD1306Display.

    UNINITIALIZED --> INACTIVE (initialization sequence sent, panel off)
    INACTIVE <--> ACTIVE (set_active)
    ACTIVE/INACTIVE --> DISPOSED (close)
    """

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISPOSED = "disposed"
