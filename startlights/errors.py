class StartLightsError(Exception):
    """Base class for errors raised by the reaction trainer core."""


class SchedulingError(StartLightsError, RuntimeError):
    """The frame scheduler refused to take more work (e.g. after close())."""


class StorageError(StartLightsError):
    """A durable key-value read or write failed."""
