"""Exception and warning types raised by meshwall."""


class MeshwallError(Exception):
    """Base class for meshwall errors."""


class InvalidColorWarning(UserWarning):
    """A hex color could not be parsed and was replaced by black."""


class InvalidDimensionsError(MeshwallError, ValueError):
    """Width, height or blend radius is not strictly positive."""


class AllocationError(MeshwallError, MemoryError):
    """The pixel buffer for a render could not be allocated."""


class InvalidGradientError(MeshwallError, ValueError):
    """A linear gradient description could not be parsed."""
