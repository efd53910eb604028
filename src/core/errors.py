# core/errors.py
from __future__ import annotations


class RadioClientError(Exception):
    """Base class for everything the radio client raises on purpose."""


class NetworkFailure(RadioClientError):
    """Request rejected, timed out, or answered with a non-success status."""


class DecodeFailure(RadioClientError):
    """Payload arrived but is not in the expected shape."""


class ExtractionMiss(RadioClientError):
    """Expected markup section (mount header, info box) is absent."""


class TransportError(RadioClientError):
    """Audio transport reported a playback failure."""
