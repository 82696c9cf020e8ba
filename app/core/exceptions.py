class AdvisoryError(Exception):
    """Base class for failures raised by the advisory core."""


class RasterDecodeError(AdvisoryError):
    """The raster bytes could not be read as an image."""


class MissingAreaError(AdvisoryError, ValueError):
    """Farm area is zero or absent and no default was allowed."""
