"""Mesh, sprite, noise and terrain-heightfield utilities for building game vertex data."""

__version__ = "0.1.0"