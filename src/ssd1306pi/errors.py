"""Exception hierarchy for the SSD1306 driver.

SSD1306Error (base)
├── ConfigurationError - unknown display model or power mode (also a ValueError)
└── DisposedError - operation attempted after close() (also a RuntimeError)

Bus failures are not wrapped: whatever the transport raises (usually
OSError) reaches the caller unchanged.
"""


class SSD1306Error(Exception):
    """Base exception for all driver errors."""


class ConfigurationError(SSD1306Error, ValueError):
    """Raised when a display is requested with an unsupported configuration.

    Raised before any byte is written to the bus, so the hardware is left
    untouched.
    """


class DisposedError(SSD1306Error, RuntimeError):
    """Raised when a closed display is used again."""
