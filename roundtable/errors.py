"""Failure taxonomy for a price update run.

Transport, data-shape and resolution failures are per security and get
skipped by the run. Configuration failures abort before any work.
"""


class UpdateError(Exception):
    """Base class for price update failures."""


class TransportError(UpdateError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class DataShapeError(UpdateError):
    pass


class AnchorResolutionError(UpdateError):
    pass


class ConfigError(UpdateError):
    pass
