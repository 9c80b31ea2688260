"""Configuration loading: defaults → YAML overlay → argparse overlay."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from ssd1306pi.transport import DEFAULT_ADDRESS, DEFAULT_BUS


@dataclass
class DisplayConfig:
    """Panel and bus settings.

    Model and power mode are kept as strings here; they are validated when
    the display is constructed, which fails with ConfigurationError before
    touching the bus.

    Attributes:
        mode: Output backend, "i2c" for the hardware panel, "pygame" for an
            emulated panel in a desktop window.
        model: Panel form factor: "128x64", "128x32" or "96x16".
        vcc_source: "switching" (on-board charge pump, most modules) or
            "external" (VCC supplied by the board).
        bus: I2C bus number (N in /dev/i2c-N).
        address: 7-bit I2C address. 0x3D on modules with SA0 tied high.
        contrast: Contrast 0-255 applied after initialization. None keeps
            the model's default.
        inverted: Start in inverted display mode.
    """

    mode: str = "i2c"
    model: str = "128x64"
    vcc_source: str = "switching"
    bus: int = DEFAULT_BUS
    address: int = DEFAULT_ADDRESS
    contrast: int | None = None
    inverted: bool = False


@dataclass
class PreviewConfig:
    """Pygame preview and render-test settings.

    Attributes:
        scale: Integer zoom factor for the preview window and the PNG saved
            by --render-test.
        fps: Event polling rate of the preview window while holding.
    """

    # 128x64 panel → 512x256 window
    scale: int = 4
    fps: int = 30


@dataclass
class ContentConfig:
    """What to draw on the panel.

    Attributes:
        lines: Text lines drawn with the built-in 8x8 font, one per glyph
            row. Drawn on top of the image when both are given.
        image: Path of an image file to threshold onto the panel.
        threshold: Brightness threshold in [0, 1]; image pixels at or above
            it are lit.
        offset_x: Image column shown at the panel's left edge.
        offset_y: Image row shown at the panel's top edge.
        workers: Threads used to sample the image.
    """

    lines: list[str] = field(default_factory=list)
    image: str | None = None
    threshold: float = 0.5
    offset_x: int = 0
    offset_y: int = 0
    workers: int = 1


@dataclass
class Config:
    """Top-level application configuration.

    Assembled from three layers with increasing priority:
      1. Hardcoded defaults (dataclass field values)
      2. YAML file overlay (config.yaml or --config path)
      3. CLI argument overlay (--model, --text, etc.)

    Attributes:
        display: Panel and bus settings.
        preview: Preview window / render-test settings.
        content: Text and image to show.
        hold_seconds: CLI-only: seconds to keep the content on screen before
            switching the panel off. 0 holds until interrupted.
        render_test: CLI-only: draw on an emulated panel, save a PNG, exit.
        output: CLI-only: PNG path written by --render-test.
        debug: CLI-only: if True, enable debug-level logging.
    """

    display: DisplayConfig = field(default_factory=DisplayConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    # CLI-only flags (not persisted in YAML)
    hold_seconds: float = 0
    render_test: bool = False
    output: str = "ssd1306_render.png"
    debug: bool = False


def _apply_yaml(config: Config, yaml_path: str) -> None:
    """Overlay YAML config values onto the Config object."""
    if not os.path.exists(yaml_path):
        return

    with open(yaml_path, "r") as f:
        data = yaml.safe_load(f)

    if not data:
        return

    if "display" in data:
        d = data["display"]
        for key in ("mode", "model", "vcc_source", "bus", "address", "contrast", "inverted"):
            if key in d:
                setattr(config.display, key, d[key])
        # YAML reads 0x3C as an int, but a quoted "0x3C" stays a string
        if isinstance(config.display.address, str):
            config.display.address = int(config.display.address, 0)
        if isinstance(config.display.contrast, str):
            config.display.contrast = int(config.display.contrast, 0)
        config.display.model = str(config.display.model)

    if "preview" in data:
        p = data["preview"]
        for key in ("scale", "fps"):
            if key in p:
                setattr(config.preview, key, p[key])

    if "content" in data:
        c = data["content"]
        for key in ("image", "threshold", "offset_x", "offset_y", "workers"):
            if key in c:
                setattr(config.content, key, c[key])
        if "lines" in c:
            config.content.lines = [str(line) for line in c["lines"] or []]


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    All arguments are optional overlays on top of YAML config.
    """
    parser = argparse.ArgumentParser(
        prog="ssd1306pi",
        description="Show text and images on an SSD1306 I2C OLED display",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--mode",
        choices=("i2c", "pygame"),
        help="Output backend: hardware panel or desktop preview",
    )
    parser.add_argument(
        "--model",
        type=str,
        help="Panel model: 128x64, 128x32 or 96x16",
    )
    parser.add_argument(
        "--vcc",
        type=str,
        help="Power source: switching or external",
    )
    parser.add_argument(
        "--bus",
        type=int,
        help="I2C bus number",
    )
    parser.add_argument(
        "--address",
        type=lambda s: int(s, 0),
        help="7-bit I2C address, e.g. 0x3C",
    )
    parser.add_argument(
        "--contrast",
        type=lambda s: int(s, 0),
        help="Contrast 0-255",
    )
    parser.add_argument(
        "--invert",
        action="store_true",
        default=None,
        help="Invert the display",
    )
    parser.add_argument(
        "--text",
        action="append",
        metavar="LINE",
        help="Text line to show (repeat for more lines)",
    )
    parser.add_argument(
        "--image",
        type=str,
        help="Image file to show",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        help="Brightness threshold 0-1 for image pixels",
    )
    parser.add_argument(
        "--hold",
        type=float,
        help="Seconds to keep the content visible (0 = until interrupted)",
    )
    parser.add_argument(
        "--render-test",
        action="store_true",
        default=False,
        help="Render to an emulated panel and save a PNG",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="PNG path for --render-test",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )
    return parser


def _apply_args(config: Config, args: argparse.Namespace) -> None:
    """Overlay CLI arguments onto the Config object."""
    if args.mode:
        config.display.mode = args.mode

    if args.model:
        config.display.model = args.model

    if args.vcc:
        config.display.vcc_source = args.vcc

    if args.bus is not None:
        config.display.bus = args.bus

    if args.address is not None:
        config.display.address = args.address

    if args.contrast is not None:
        config.display.contrast = args.contrast

    if args.invert is True:
        config.display.inverted = True

    # --text replaces YAML lines rather than appending to them
    if args.text:
        config.content.lines = list(args.text)

    if args.image:
        config.content.image = args.image

    if args.threshold is not None:
        config.content.threshold = args.threshold

    if args.hold is not None:
        config.hold_seconds = args.hold

    if args.output:
        config.output = args.output

    config.render_test = args.render_test
    config.debug = args.debug


def load_config(
    yaml_path: str | None = None,
    cli_args: list[str] | None = None,
) -> Config:
    """Load config: defaults → YAML overlay → argparse overlay.

    Args:
        yaml_path: Path to YAML config file. Defaults to config.yaml in project root.
        cli_args: CLI arguments list. None means use sys.argv.
    """
    config = Config()

    parser = _build_parser()
    args = parser.parse_args(cli_args if cli_args is not None else None)

    # Default YAML path: config.yaml in project root (three levels up from
    # this file). CLI --config overrides.
    if yaml_path is None:
        if args.config:
            yaml_path = args.config
        else:
            yaml_path = os.path.join(
                Path(__file__).resolve().parent.parent.parent, "config.yaml"
            )

    _apply_yaml(config, yaml_path)
    _apply_args(config, args)

    return config
