"""Tests for the command encoder and command sequences."""

from unittest.mock import MagicMock, call

import pytest

from ssd1306pi.models import DisplayModel, VccSourceMode
from ssd1306pi.protocol import (
    ARGUMENT_COUNTS,
    Command,
    CommandProtocol,
    address_window_sequence,
    initialization_sequence,
)


@pytest.fixture
def transport():
    return MagicMock()


class TestCommandTable:
    """Tests for the opcode values."""

    def test_opcode_values(self):
        """Verify a representative selection of opcodes against the datasheet."""
        assert Command.SET_CONTRAST == 0x81
        assert Command.TURN_OFF == 0xAE
        assert Command.TURN_ON == 0xAF
        assert Command.SET_CHARGE_PUMP_MODE == 0x8D
        assert Command.SET_COLUMN_ADDRESS_RANGE == 0x21
        assert Command.SET_PAGE_ADDRESS_RANGE == 0x22
        assert Command.SCAN_DIRECTION_MODE_DECREMENT == 0xC8
        assert Command.SEGMENT_REMAP_MODE_ON == 0xA1

    def test_argument_counts(self):
        """Verify that range commands take two arguments and on/off none."""
        assert ARGUMENT_COUNTS[Command.SET_COLUMN_ADDRESS_RANGE] == 2
        assert ARGUMENT_COUNTS[Command.SET_PAGE_ADDRESS_RANGE] == 2
        assert ARGUMENT_COUNTS[Command.SET_CONTRAST] == 1
        assert Command.TURN_ON not in ARGUMENT_COUNTS


class TestCommandProtocol:
    """Tests for CommandProtocol byte encoding."""

    def test_command_without_args(self, transport):
        """Verify that a bare opcode is one write with control byte 0x00."""
        CommandProtocol(transport).send(Command.TURN_ON)
        transport.write.assert_called_once_with(0x00, b"\xaf")

    def test_each_argument_is_a_separate_write(self, transport):
        """Verify that opcode and arguments go out as individual command writes."""
        CommandProtocol(transport).send(Command.SET_COLUMN_ADDRESS_RANGE, 0, 127)
        assert transport.write.call_args_list == [
            call(0x00, b"\x21"),
            call(0x00, b"\x00"),
            call(0x00, b"\x7f"),
        ]

    def test_wrong_argument_count_raises(self, transport):
        """Verify that a missing argument is rejected before anything is written."""
        with pytest.raises(ValueError):
            CommandProtocol(transport).send(Command.SET_CONTRAST)
        transport.write.assert_not_called()

    def test_argument_out_of_byte_range(self, transport):
        """Verify that an argument above 0xFF is rejected."""
        with pytest.raises(ValueError):
            CommandProtocol(transport).send(Command.SET_CONTRAST, 256)

    def test_send_data_is_one_write(self, transport):
        """Verify that packed data is sent as one 0x40-prefixed write."""
        CommandProtocol(transport).send_data(b"\x40\x01\x02\x03")
        transport.write.assert_called_once_with(0x40, b"\x01\x02\x03")

    def test_send_data_requires_control_byte(self, transport):
        """Verify that data without the 0x40 prefix is rejected."""
        with pytest.raises(ValueError):
            CommandProtocol(transport).send_data(b"\x01\x02")

    def test_transport_error_propagates(self, failing_transport):
        """Verify that bus errors reach the caller unchanged."""
        with pytest.raises(OSError) as exc_info:
            CommandProtocol(failing_transport).send(Command.TURN_OFF)
        assert exc_info.value.errno == 121


class TestSequences:
    """Tests for the initialization and address window sequences."""

    def test_init_sequence_128x64_external(self):
        """Verify the full command order for a 128x64 panel on external power."""
        steps = initialization_sequence(
            DisplayModel.DISPLAY_128X64, VccSourceMode.EXTERNAL, 0x9F
        )
        assert steps == [
            (Command.TURN_OFF, ()),
            (Command.SET_CLOCK_DIVIDER, (0x80,)),
            (Command.SET_MULTIPLEXER, (0x3F,)),
            (Command.SET_DISPLAY_OFFSET, (0x00,)),
            (Command.SET_START_LINE, ()),
            (Command.SET_CHARGE_PUMP_MODE, (0x10,)),
            (Command.SET_MEMORY_MODE, (0x00,)),
            (Command.SEGMENT_REMAP_MODE_ON, ()),
            (Command.SCAN_DIRECTION_MODE_DECREMENT, ()),
            (Command.SET_COM_PINS, (0x12,)),
            (Command.SET_CONTRAST, (0x9F,)),
            (Command.SET_PRECHARGE_MODE, (0x22,)),
            (Command.SET_VOLTAGE_OUTPUT, (0x40,)),
            (Command.RESUME, ()),
            (Command.DISPLAY_MODE_NORMAL, ()),
        ]

    def test_init_sequence_96x16_switching(self):
        """Verify model and power specific values for a 96x16 switching panel."""
        steps = dict(
            initialization_sequence(DisplayModel.DISPLAY_96X16, VccSourceMode.SWITCHING, 0x8F)
        )
        assert steps[Command.SET_CLOCK_DIVIDER] == (0x60,)
        assert steps[Command.SET_MULTIPLEXER] == (0x0F,)
        assert steps[Command.SET_COM_PINS] == (0x02,)
        assert steps[Command.SET_CHARGE_PUMP_MODE] == (0x14,)
        assert steps[Command.SET_PRECHARGE_MODE] == (0xF1,)

    def test_address_window(self):
        """Verify column range [0, width-1] then page range [0, pages-1]."""
        assert address_window_sequence(96, 2) == [
            (Command.SET_COLUMN_ADDRESS_RANGE, (0, 95)),
            (Command.SET_PAGE_ADDRESS_RANGE, (0, 1)),
        ]

    def test_send_sequence_byte_stream(self, transport):
        """Verify that a sequence is flattened into single-byte command writes."""
        CommandProtocol(transport).send_sequence(address_window_sequence(128, 8))
        sent = [c.args for c in transport.write.call_args_list]
        assert sent == [
            (0x00, b"\x21"), (0x00, b"\x00"), (0x00, b"\x7f"),
            (0x00, b"\x22"), (0x00, b"\x00"), (0x00, b"\x07"),
        ]
