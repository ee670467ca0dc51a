"""poi-atlas: persisted point-of-interest annotations for a map view."""

__version__ = "0.1.0"
