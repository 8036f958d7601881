# -*- coding: utf-8 -*-
"""
Exceptions - Error types raised while building and decoding geo cameras.

All errors derive from ``ValueError`` so callers that guard input
validation with ``except ValueError`` keep working.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""


class GeoCameraError(ValueError):
    """Base class for geo camera errors."""


class ConfigurationError(GeoCameraError):
    """Metadata cannot define a supported transform, or a required context is absent."""


class FormatError(GeoCameraError):
    """Malformed filename token, world file content, or binary record."""


class UnsupportedVersionError(GeoCameraError):
    """Binary record carries a version this reader cannot decode."""

    def __init__(self, version: int, record: str = 'geo camera'):
        super().__init__(f"Unknown {record} version number {version}")
        self.version = version
        self.record = record


__all__ = [
    "GeoCameraError",
    "ConfigurationError",
    "FormatError",
    "UnsupportedVersionError",
]
