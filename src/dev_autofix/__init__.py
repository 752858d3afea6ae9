"""Runs a dev server and repairs the JS/TS errors it reports."""

__version__ = "0.1.0"
