"""Exception types shared across timesince."""


class TimesinceError(Exception):
    """Base class for errors that abort a timesince invocation."""


class StoreError(TimesinceError):
    """The event store could not be located, read, parsed or written."""
