"""Batch runner for a directory of toolchain test programs."""

__version__ = '0.1.0'
