# ringer/errors.py


class RingError(Exception):
    """Base class for errors that abort a run."""


class ResolutionError(RingError):
    """Target is neither an IP literal nor a resolvable hostname."""


class SocketCreationError(RingError):
    """Raw socket could not be created or configured (usually missing privilege)."""
