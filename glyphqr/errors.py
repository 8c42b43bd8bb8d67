"""Exceptions raised while building a QR Code symbol."""

from __future__ import annotations


class QRCodeError(Exception):
    """Base class for every error raised by the encoder."""


class CapacityExceededError(QRCodeError, ValueError):
    """The payload does not fit into a version 40 symbol at the requested level."""


class InvalidParameterError(QRCodeError, ValueError):
    """A caller supplied an out of range mask, level or mode."""


class InternalInvariantError(QRCodeError, RuntimeError):
    """The encoder reached a state that correct tables can never produce."""
