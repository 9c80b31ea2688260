"""Entry point for ssd1306pi."""

import logging
import sys

from ssd1306pi.config import load_config


def run_render_test(config):
    """Render the configured content on an emulated panel and save a PNG."""
    from ssd1306pi.app import render_to_file

    output_path = render_to_file(config)
    print(f"Rendered test output to: {output_path}")


def run_app(config):
    """Show the configured content on the hardware panel or preview window."""
    from ssd1306pi.app import OledApp

    app = OledApp(config)
    app.run()


def main():
    """CLI entry point for the ssd1306pi application.

    Loads configuration (defaults -> YAML -> CLI args), sets up logging
    to stderr, then dispatches based on CLI flags:
      --render-test: save an emulated panel image and exit
      (default):     show content on the configured backend
    """
    config = load_config()

    level = logging.DEBUG if config.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    logger = logging.getLogger(__name__)
    logger.debug(
        "Config loaded: model=%s, mode=%s, debug=%s",
        config.display.model, config.display.mode, config.debug,
    )

    try:
        if config.render_test:
            logger.info("Running render test")
            run_render_test(config)
        else:
            logger.info("Starting display application")
            run_app(config)
    except KeyboardInterrupt:
        print("\nShutting down.")
        sys.exit(0)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
