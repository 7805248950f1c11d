"""myprice: heuristic receipt reconstruction from OCR fragments."""

__version__ = "0.1.0"
