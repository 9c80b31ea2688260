"""Tests for ssd1306pi.config."""

import pytest

from ssd1306pi.config import load_config


class TestConfigDefaults:
    """Tests that Config loads sensible hardcoded defaults when no YAML file or CLI args are given."""

    def test_default_display(self):
        """Verify the default panel is a 128x64 switching module at 0x3C on bus 1."""
        config = load_config(yaml_path="/nonexistent.yaml", cli_args=[])
        assert config.display.mode == "i2c"
        assert config.display.model == "128x64"
        assert config.display.vcc_source == "switching"
        assert config.display.bus == 1
        assert config.display.address == 0x3C
        assert config.display.contrast is None
        assert config.display.inverted is False

    def test_default_preview(self):
        """Verify default preview scale (4) and FPS (30)."""
        config = load_config(yaml_path="/nonexistent.yaml", cli_args=[])
        assert config.preview.scale == 4
        assert config.preview.fps == 30

    def test_default_content(self):
        """Verify that nothing is drawn by default and the threshold is 0.5."""
        config = load_config(yaml_path="/nonexistent.yaml", cli_args=[])
        assert config.content.lines == []
        assert config.content.image is None
        assert config.content.threshold == 0.5
        assert (config.content.offset_x, config.content.offset_y) == (0, 0)
        assert config.content.workers == 1

    def test_default_cli_flags(self):
        """Verify that all CLI-only flags default to off."""
        config = load_config(yaml_path="/nonexistent.yaml", cli_args=[])
        assert config.hold_seconds == 0
        assert config.render_test is False
        assert config.output == "ssd1306_render.png"
        assert config.debug is False


class TestYAMLOverlay:
    """Tests that YAML config values correctly override hardcoded defaults."""

    def test_yaml_overrides_display(self, sample_config_yaml):
        """Verify that YAML overrides every display setting."""
        config = load_config(yaml_path=sample_config_yaml, cli_args=[])
        assert config.display.mode == "pygame"
        assert config.display.model == "128x32"
        assert config.display.vcc_source == "external"
        assert config.display.bus == 3
        assert config.display.address == 0x3D
        assert config.display.contrast == 32
        assert config.display.inverted is True

    def test_yaml_overrides_preview(self, sample_config_yaml):
        """Verify that YAML overrides preview scale (2) and FPS (10)."""
        config = load_config(yaml_path=sample_config_yaml, cli_args=[])
        assert config.preview.scale == 2
        assert config.preview.fps == 10

    def test_yaml_overrides_content(self, sample_config_yaml):
        """Verify that YAML sets text lines, threshold, offsets and workers."""
        config = load_config(yaml_path=sample_config_yaml, cli_args=[])
        assert config.content.lines == ["Line one", "Line two"]
        assert config.content.threshold == 0.25
        assert (config.content.offset_x, config.content.offset_y) == (4, 2)
        assert config.content.workers == 2

    def test_quoted_hex_address(self, tmp_path):
        """Verify that a quoted "0x3D" address string is parsed as hex."""
        path = tmp_path / "config.yaml"
        path.write_text('display:\n  address: "0x3D"\n')
        config = load_config(yaml_path=str(path), cli_args=[])
        assert config.display.address == 0x3D

    def test_quoted_hex_contrast(self, tmp_path):
        """Verify that a quoted "0x8F" contrast string is parsed as hex."""
        path = tmp_path / "config.yaml"
        path.write_text('display:\n  contrast: "0x8F"\n')
        config = load_config(yaml_path=str(path), cli_args=[])
        assert config.display.contrast == 0x8F

    def test_non_string_lines_converted(self, tmp_path):
        """Verify that numeric YAML lines become strings."""
        path = tmp_path / "config.yaml"
        path.write_text("content:\n  lines:\n    - 42\n    - 3.5\n")
        config = load_config(yaml_path=str(path), cli_args=[])
        assert config.content.lines == ["42", "3.5"]

    def test_empty_yaml_uses_defaults(self, tmp_path):
        """Verify that an empty YAML file leaves every default in place."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        config = load_config(yaml_path=str(path), cli_args=[])
        assert config.display.model == "128x64"

    def test_missing_yaml_uses_defaults(self):
        """Verify that a nonexistent YAML path silently falls back to defaults."""
        config = load_config(yaml_path="/does/not/exist.yaml", cli_args=[])
        assert config.display.address == 0x3C

    def test_config_flag_selects_yaml(self, sample_config_yaml):
        """Verify that --config points load_config at a YAML file."""
        config = load_config(cli_args=["--config", sample_config_yaml])
        assert config.display.model == "128x32"


class TestCLIOverlay:
    """Tests that CLI arguments take highest precedence over both defaults and YAML values."""

    def test_panel_flags(self):
        """Verify --mode, --model, --vcc and --bus."""
        config = load_config(
            yaml_path="/nonexistent.yaml",
            cli_args=["--mode", "pygame", "--model", "96x16", "--vcc", "external", "--bus", "0"],
        )
        assert config.display.mode == "pygame"
        assert config.display.model == "96x16"
        assert config.display.vcc_source == "external"
        assert config.display.bus == 0

    def test_hex_address_and_contrast(self):
        """Verify that --address and --contrast accept hex literals."""
        config = load_config(
            yaml_path="/nonexistent.yaml",
            cli_args=["--address", "0x3D", "--contrast", "0x10"],
        )
        assert config.display.address == 0x3D
        assert config.display.contrast == 0x10

    def test_invalid_mode_rejected(self):
        """Verify that argparse rejects an unknown backend."""
        with pytest.raises(SystemExit):
            load_config(yaml_path="/nonexistent.yaml", cli_args=["--mode", "spi"])

    def test_invert_flag(self):
        """Verify that --invert sets display.inverted=True."""
        config = load_config(yaml_path="/nonexistent.yaml", cli_args=["--invert"])
        assert config.display.inverted is True

    def test_repeated_text(self):
        """Verify that --text may be repeated, one line each."""
        config = load_config(
            yaml_path="/nonexistent.yaml",
            cli_args=["--text", "Hello", "--text", "World"],
        )
        assert config.content.lines == ["Hello", "World"]

    def test_image_and_threshold(self):
        """Verify --image and --threshold set the image content."""
        config = load_config(
            yaml_path="/nonexistent.yaml",
            cli_args=["--image", "logo.png", "--threshold", "0.8"],
        )
        assert config.content.image == "logo.png"
        assert config.content.threshold == 0.8

    def test_hold_flag(self):
        """Verify that --hold 2.5 sets hold_seconds."""
        config = load_config(yaml_path="/nonexistent.yaml", cli_args=["--hold", "2.5"])
        assert config.hold_seconds == 2.5

    def test_render_test_flag(self):
        """Verify that --render-test and --output set up the PNG render."""
        config = load_config(
            yaml_path="/nonexistent.yaml",
            cli_args=["--render-test", "--output", "out/panel.png"],
        )
        assert config.render_test is True
        assert config.output == "out/panel.png"

    def test_debug_flag(self):
        """Verify that --debug sets config.debug=True."""
        config = load_config(yaml_path="/nonexistent.yaml", cli_args=["--debug"])
        assert config.debug is True

    def test_cli_overrides_yaml(self, sample_config_yaml):
        """Verify that CLI args (--model, --text) override YAML values."""
        config = load_config(
            yaml_path=sample_config_yaml,
            cli_args=["--model", "128x64", "--text", "Only line"],
        )
        assert config.display.model == "128x64"
        assert config.content.lines == ["Only line"]
        # Untouched YAML values survive
        assert config.display.address == 0x3D
