"""In-memory SSD1306 that decodes the byte stream a driver writes.

PanelEmulator implements the Transport interface, so a display can be
driven without hardware: commands update emulated controller registers,
data writes land in emulated display RAM, and to_image() shows what the
physical panel would light up.
"""

from __future__ import annotations

from PIL import Image

from ssd1306pi.models import DisplayModel
from ssd1306pi.protocol import ARGUMENT_COUNTS, CONTROL_COMMAND, CONTROL_DATA, Command

# Controller display RAM: 128 segment columns x 8 pages of 8 rows
RAM_COLUMNS = 128
RAM_PAGES = 8

# SetMemoryMode arguments
MEMORY_MODE_HORIZONTAL = 0x00
MEMORY_MODE_VERTICAL = 0x01
MEMORY_MODE_PAGE = 0x02


class PanelEmulator:
    """Emulated controller and panel behind a Transport interface.

    Orientation follows the usual module wiring: segment remap on (0xA1)
    with decrementing COM scan (0xC8) shows RAM upright. Switching either
    mode mirrors the image on that axis.

    Attributes:
        writes: Every (control, payload) pair received, in order.
        commands: Decoded (opcode, args) tuples, in order.
        registers: Last arguments seen for configuration commands that do
            not change the emulated picture (clock, multiplexer, ...).
        close_count: Number of close() calls received.
    """

    def __init__(self, width: int = 128, height: int = 64) -> None:
        if not (0 < width <= RAM_COLUMNS and 0 < height <= RAM_PAGES * 8):
            raise ValueError(f"Panel size {width}x{height} exceeds controller RAM")
        self.width = width
        self.height = height
        self.ram = bytearray(RAM_COLUMNS * RAM_PAGES)
        self.writes: list[tuple[int, bytes]] = []
        self.commands: list[tuple[int, tuple[int, ...]]] = []
        self.registers: dict[int, tuple[int, ...]] = {}
        self.close_count = 0

        # Power-on reset values from the datasheet
        self.display_on = False
        self.contrast = 0x7F
        self.inverted = False
        self.entire_display_on = False
        self.segment_remap = False
        self.scan_decrement = False
        self.start_line = 0
        self.memory_mode = MEMORY_MODE_PAGE
        self.column_start, self.column_end = 0, RAM_COLUMNS - 1
        self.page_start, self.page_end = 0, RAM_PAGES - 1
        self.column = 0
        self.page = 0

        self._pending: list[int] = []
        self._expected_args = 0

    @classmethod
    def for_model(cls, model: DisplayModel | str) -> PanelEmulator:
        model = DisplayModel.parse(model)
        return cls(model.width, model.height)

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    # -- Transport interface --------------------------------------------------

    def write(self, control: int, payload: bytes) -> None:
        if self.closed:
            raise OSError("Emulated bus is closed")
        payload = bytes(payload)
        self.writes.append((control, payload))
        if control == CONTROL_COMMAND:
            for byte in payload:
                self._command_byte(byte)
        elif control == CONTROL_DATA:
            for byte in payload:
                self._data_byte(byte)
        else:
            raise ValueError(f"Unknown control byte 0x{control:02X}")

    def close(self) -> None:
        self.close_count += 1

    # -- Command decoding -----------------------------------------------------

    def _command_byte(self, byte: int) -> None:
        if self._pending:
            self._pending.append(byte)
            if len(self._pending) - 1 == self._expected_args:
                opcode, *args = self._pending
                self._pending = []
                self._execute(opcode, tuple(args))
            return
        expected = ARGUMENT_COUNTS.get(byte, 0)
        if expected:
            self._pending = [byte]
            self._expected_args = expected
        else:
            self._execute(byte, ())

    def _execute(self, opcode: int, args: tuple[int, ...]) -> None:
        self.commands.append((opcode, args))
        match opcode:
            case Command.TURN_ON:
                self.display_on = True
            case Command.TURN_OFF:
                self.display_on = False
            case Command.SET_CONTRAST:
                self.contrast = args[0]
            case Command.DISPLAY_MODE_NORMAL:
                self.inverted = False
            case Command.DISPLAY_MODE_INVERT:
                self.inverted = True
            case Command.ENTIRE_DISPLAY_ON:
                self.entire_display_on = True
            case Command.RESUME:
                self.entire_display_on = False
            case Command.SEGMENT_REMAP_MODE_ON:
                self.segment_remap = True
            case Command.SEGMENT_REMAP_MODE_OFF:
                self.segment_remap = False
            case Command.SCAN_DIRECTION_MODE_DECREMENT:
                self.scan_decrement = True
            case Command.SCAN_DIRECTION_MODE_INCREMENT:
                self.scan_decrement = False
            case Command.SET_MEMORY_MODE:
                self.memory_mode = args[0] & 0x03
            case Command.SET_COLUMN_ADDRESS_RANGE:
                self.column_start, self.column_end = args[0] & 0x7F, args[1] & 0x7F
                self.column = self.column_start
            case Command.SET_PAGE_ADDRESS_RANGE:
                self.page_start, self.page_end = args[0] & 0x07, args[1] & 0x07
                self.page = self.page_start
            case _ if 0x40 <= opcode <= 0x7F:
                self.start_line = opcode & 0x3F
            case _ if 0xB0 <= opcode <= 0xB7:
                # Page start address, page addressing mode only
                self.page = opcode & 0x07
            case _ if opcode <= 0x0F:
                self.column = (self.column & 0xF0) | (opcode & 0x0F)
            case _ if 0x10 <= opcode <= 0x1F:
                self.column = (self.column & 0x0F) | ((opcode & 0x0F) << 4)
            case _:
                self.registers[opcode] = args

    # -- Display RAM ------------------------------------------------------------

    def _data_byte(self, byte: int) -> None:
        self.ram[self.page * RAM_COLUMNS + self.column] = byte
        if self.memory_mode == MEMORY_MODE_HORIZONTAL:
            if self.column >= self.column_end:
                self.column = self.column_start
                self.page = self.page_start if self.page >= self.page_end else self.page + 1
            else:
                self.column += 1
        elif self.memory_mode == MEMORY_MODE_VERTICAL:
            if self.page >= self.page_end:
                self.page = self.page_start
                self.column = (
                    self.column_start if self.column >= self.column_end else self.column + 1
                )
            else:
                self.page += 1
        else:
            self.column = (self.column + 1) % RAM_COLUMNS

    def ram_bytes(self) -> bytes:
        """Display RAM covered by the panel, in framebuffer byte order."""
        pages = (self.height + 7) // 8
        return b"".join(
            self.ram[page * RAM_COLUMNS : page * RAM_COLUMNS + self.width]
            for page in range(pages)
        )

    def ram_pixel(self, x: int, y: int) -> bool:
        """Bit stored in display RAM for column x, row y."""
        return bool((self.ram[(y // 8) * RAM_COLUMNS + x] >> (y % 8)) & 1)

    def lit(self, x: int, y: int) -> bool:
        """Whether the panel pixel at (x, y) is lit, after all display modes."""
        if not self.display_on:
            return False
        if self.entire_display_on:
            return True
        column = x if self.segment_remap else self.width - 1 - x
        row = y if self.scan_decrement else self.height - 1 - y
        row = (row + self.start_line) % (RAM_PAGES * 8)
        return self.ram_pixel(column, row) != self.inverted

    def to_image(self, scale: int = 1) -> Image.Image:
        """Grayscale picture of the panel; lit pixels brighten with contrast."""
        # Even at contrast 0 an OLED pixel stays faintly visible
        level = 64 + self.contrast * 191 // 255
        image = Image.new("L", (self.width, self.height), 0)
        pixels = image.load()
        for y in range(self.height):
            for x in range(self.width):
                if self.lit(x, y):
                    pixels[x, y] = level
        if scale > 1:
            size = (self.width * scale, self.height * scale)
            image = image.resize(size, Image.Resampling.NEAREST)
        return image
