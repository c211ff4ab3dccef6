"""Discrete-tile movement and collision engine."""

__version__ = "0.1.0"
