"""Exceptions raised by the MPG match engine."""


class MpgError(Exception):
    """Base exception for all engine errors."""


class MatchPayloadError(MpgError, ValueError):
    """Raised when a match payload is structurally incomplete or invalid."""
