"""Bus transports the display driver writes through.

I2CTransport requires the 'hardware' extra: pip install -e ".[hardware]"
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

# Default 7-bit address of SSD1306 modules (SA0 pin low)
DEFAULT_ADDRESS = 0x3C
# /dev/i2c-1 is the header I2C bus on Raspberry Pi boards
DEFAULT_BUS = 1


class Transport(Protocol):
    """Synchronous byte sink bound to one device on the bus.

    write() must send the control byte and the payload as one bus
    transaction and either succeed completely or raise.
    """

    def write(self, control: int, payload: bytes) -> None: ...

    def close(self) -> None: ...


class I2CTransport:
    """Write to an SSD1306 on a Linux I2C bus using smbus2."""

    def __init__(self, bus: int = DEFAULT_BUS, address: int = DEFAULT_ADDRESS) -> None:
        """Open the I2C bus device.

        smbus2 is imported lazily so that machines without the hardware
        extra can still use the emulator and the rest of the package.

        Args:
            bus: I2C bus number, i.e. N in /dev/i2c-N.
            address: 7-bit device address. 0x3C for most modules, 0x3D when
                the SA0 pin is tied high.
        """
        if not 0x03 <= address <= 0x77:
            raise ValueError(f"Invalid 7-bit I2C address: 0x{address:02X}")

        from smbus2 import SMBus, i2c_msg

        self._i2c_msg = i2c_msg
        self.address = address
        self.bus_number = bus
        self._bus: SMBus | None = SMBus(bus)
        logger.info("Opened I2C bus %d for device 0x%02X", bus, address)

    def write(self, control: int, payload: bytes) -> None:
        """Send control byte and payload in a single combined I2C message."""
        if self._bus is None:
            raise OSError(f"I2C bus {self.bus_number} is closed")
        # i2c_rdwr issues one START ... STOP transaction regardless of
        # length; write_i2c_block_data would cap the payload at 32 bytes.
        msg = self._i2c_msg.write(self.address, [control, *payload])
        self._bus.i2c_rdwr(msg)

    def close(self) -> None:
        """Release the bus file descriptor. Safe to call more than once."""
        if self._bus is None:
            return
        self._bus.close()
        self._bus = None
        logger.info("Closed I2C bus %d", self.bus_number)
