"""timesince: track how long it's been since you last did something."""

from timesince.runtime.version import VERSION

__all__ = ["VERSION"]
