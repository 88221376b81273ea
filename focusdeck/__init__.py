"""FocusDeck: a desktop dashboard built around a persisted focus timer."""

__version__ = "0.1.0"
