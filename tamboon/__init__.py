"""Decode ROT-128 donation files and charge them through the Omise API."""

__version__ = "0.1.0"