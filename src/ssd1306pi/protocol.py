"""SSD1306 command set and the command sequences the driver sends.

Every command byte and every argument byte goes out as its own transport
write prefixed by the command control byte (0x00). Pixel data goes out as a
single write prefixed by the data control byte (0x40).
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ssd1306pi.models import DisplayModel, VccSourceMode
    from ssd1306pi.transport import Transport

logger = logging.getLogger(__name__)

# Control byte announcing that the following byte is a command or argument
CONTROL_COMMAND = 0x00
# Control byte announcing that the following bytes are display RAM data
CONTROL_DATA = 0x40


class Command(IntEnum):
    """SSD1306 opcodes (datasheet section 9, command table)."""

    SET_CONTRAST = 0x81
    RESUME = 0xA4
    ENTIRE_DISPLAY_ON = 0xA5
    DISPLAY_MODE_NORMAL = 0xA6
    DISPLAY_MODE_INVERT = 0xA7
    TURN_OFF = 0xAE
    TURN_ON = 0xAF
    SET_DISPLAY_OFFSET = 0xD3
    SET_COM_PINS = 0xDA
    SET_VOLTAGE_OUTPUT = 0xDB
    SET_CLOCK_DIVIDER = 0xD5
    SET_PRECHARGE_MODE = 0xD9
    SET_MULTIPLEXER = 0xA8
    # Low/high column nibble and start line carry their value in the low bits
    SET_LOW_COLUMN = 0x00
    SET_HIGH_COLUMN = 0x10
    SET_START_LINE = 0x40
    SET_MEMORY_MODE = 0x20
    SET_COLUMN_ADDRESS_RANGE = 0x21
    SET_PAGE_ADDRESS_RANGE = 0x22
    SCAN_DIRECTION_MODE_INCREMENT = 0xC0
    SCAN_DIRECTION_MODE_DECREMENT = 0xC8
    SEGMENT_REMAP_MODE_OFF = 0xA0
    SEGMENT_REMAP_MODE_ON = 0xA1
    SET_CHARGE_PUMP_MODE = 0x8D


# Argument bytes that follow each opcode. Opcodes not listed take none.
ARGUMENT_COUNTS: dict[int, int] = {
    Command.SET_CONTRAST: 1,
    Command.SET_DISPLAY_OFFSET: 1,
    Command.SET_COM_PINS: 1,
    Command.SET_VOLTAGE_OUTPUT: 1,
    Command.SET_CLOCK_DIVIDER: 1,
    Command.SET_PRECHARGE_MODE: 1,
    Command.SET_MULTIPLEXER: 1,
    Command.SET_MEMORY_MODE: 1,
    Command.SET_COLUMN_ADDRESS_RANGE: 2,
    Command.SET_PAGE_ADDRESS_RANGE: 2,
    Command.SET_CHARGE_PUMP_MODE: 1,
}

# SetMemoryMode argument: horizontal addressing, walks the column/page window
MEMORY_MODE_HORIZONTAL = 0x00
# SetVoltageOutput argument: VCOMH deselect level ~0.77 x VCC
VCOM_DESELECT_LEVEL = 0x40

CommandStep = tuple[Command, tuple[int, ...]]


def initialization_sequence(
    model: DisplayModel, vcc_source: VccSourceMode, contrast: int
) -> list[CommandStep]:
    """Commands that take a freshly powered panel to a displayable state.

    The panel is left switched off; turning it on is a separate step.
    """
    return [
        (Command.TURN_OFF, ()),
        (Command.SET_CLOCK_DIVIDER, (model.clock_divider,)),
        (Command.SET_MULTIPLEXER, (model.multiplexer,)),
        (Command.SET_DISPLAY_OFFSET, (0x00,)),
        # Start line 0: the line number is OR-ed into the opcode
        (Command.SET_START_LINE, ()),
        (Command.SET_CHARGE_PUMP_MODE, (vcc_source.charge_pump,)),
        (Command.SET_MEMORY_MODE, (MEMORY_MODE_HORIZONTAL,)),
        (Command.SEGMENT_REMAP_MODE_ON, ()),
        (Command.SCAN_DIRECTION_MODE_DECREMENT, ()),
        (Command.SET_COM_PINS, (model.com_pins,)),
        (Command.SET_CONTRAST, (contrast,)),
        (Command.SET_PRECHARGE_MODE, (vcc_source.precharge,)),
        (Command.SET_VOLTAGE_OUTPUT, (VCOM_DESELECT_LEVEL,)),
        (Command.RESUME, ()),
        (Command.DISPLAY_MODE_NORMAL, ()),
    ]


def address_window_sequence(width: int, page_count: int) -> list[CommandStep]:
    """Commands that point the RAM write cursor at the whole panel."""
    return [
        (Command.SET_COLUMN_ADDRESS_RANGE, (0, width - 1)),
        (Command.SET_PAGE_ADDRESS_RANGE, (0, page_count - 1)),
    ]


class CommandProtocol:
    """Encodes commands and display data onto a byte-oriented transport."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _write_byte(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Command byte out of range: {value}")
        self.transport.write(CONTROL_COMMAND, bytes([value]))

    def send(self, command: Command, *args: int) -> None:
        """Send an opcode followed by its argument bytes, one write each."""
        expected = ARGUMENT_COUNTS.get(command, 0)
        if len(args) != expected:
            raise ValueError(
                f"{command.name} takes {expected} argument(s), got {len(args)}"
            )
        self._write_byte(command)
        for arg in args:
            self._write_byte(arg)

    def send_sequence(self, steps: list[CommandStep]) -> None:
        for command, args in steps:
            self.send(command, *args)

    def send_data(self, packed: bytes) -> None:
        """Send a packed framebuffer (control byte first) as one write."""
        if not packed or packed[0] != CONTROL_DATA:
            raise ValueError("Packed data must start with the 0x40 control byte")
        self.transport.write(packed[0], bytes(packed[1:]))
