"""Exceptions raised by the hand overlay."""


class HandOverlayError(Exception):
    """Base class for all hand overlay errors."""


class InvalidLandmarkSet(HandOverlayError, ValueError):
    """A landmark sequence is too short or malformed to derive a pose from."""

    def __init__(self, message, count=None):
        super().__init__(message)
        self.count = count


class ConfigError(HandOverlayError):
    """Configuration file or values could not be used."""


class AssetError(HandOverlayError):
    """A model asset could not be resolved or parsed."""
