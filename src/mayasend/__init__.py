"""mayasend - drive Maya through its command port."""

__version__ = "0.1.0"
