"""Log SQL operations performed through a wrapped database driver connector."""

__version__ = "0.2.0"

__all__ = [
    "connector",
    "context",
    "default_logger",
    "driver",
    "logging_adapter",
    "sql_logger",
    "timing",
]