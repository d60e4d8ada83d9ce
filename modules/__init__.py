"""Helper modules for the reseller order portal."""

__all__ = [
    "catalog",
]
