"""deplicenses - collect license files of third-party dependencies."""

__version__ = "0.1.0"
