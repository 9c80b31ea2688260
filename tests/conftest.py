"""Shared fixtures: emulated panels, failing transports and sample files."""

from unittest.mock import MagicMock

import pytest
from PIL import Image

from ssd1306pi.display import SSD1306Display
from ssd1306pi.emulator import PanelEmulator


@pytest.fixture
def emulator():
    """An emulated 128x64 panel acting as the transport."""
    return PanelEmulator(128, 64)


@pytest.fixture
def display(emulator):
    """A 128x64 display on switching power, initialized against the emulator."""
    return SSD1306Display(emulator, "128x64", "switching")


@pytest.fixture
def small_emulator():
    """An emulated 96x16 panel."""
    return PanelEmulator(96, 16)


@pytest.fixture
def failing_transport():
    """A transport whose every write fails like a NACKed I2C transfer."""
    transport = MagicMock()
    transport.write.side_effect = OSError(121, "Remote I/O error")
    return transport


@pytest.fixture
def checkerboard_png(tmp_path):
    """A 16x16 RGB checkerboard of 8x8 white/black tiles saved as PNG."""
    img = Image.new("RGB", (16, 16), (0, 0, 0))
    for y in range(16):
        for x in range(16):
            if (x // 8 + y // 8) % 2 == 0:
                img.putpixel((x, y), (255, 255, 255))
    path = tmp_path / "checker.png"
    img.save(path)
    return str(path)


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Create a temporary YAML config file."""
    yaml_content = """display:
  mode: pygame
  model: "128x32"
  vcc_source: external
  bus: 3
  address: 0x3D
  contrast: 32
  inverted: true

preview:
  scale: 2
  fps: 10

content:
  lines:
    - "Line one"
    - "Line two"
  threshold: 0.25
  offset_x: 4
  offset_y: 2
  workers: 2
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml_content)
    return str(config_file)
