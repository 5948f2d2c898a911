"""Merge several rustdoc output directories into one documentation site."""

__version__ = "0.1.0"
