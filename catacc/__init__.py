"""Per-category accuracy reports for multi-class classifiers."""

__version__ = "0.1.0"
