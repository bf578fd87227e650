"""Provenance-labelled photo watermarking service."""

__version__ = "0.1.0"
