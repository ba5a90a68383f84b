"""docscan — scan documents against hot-swappable regex rule sets."""

__version__ = "0.1.0"
