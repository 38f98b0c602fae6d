"""Render a quad in an OpenGL window driven by a fixed-rate tick loop."""

__version__ = "0.1.0"