"""Travel booking service: checkout pricing, booking lifecycle and ratings."""

__version__ = "1.0.0"
