"""Exception types raised by wallhue."""


class WallhueError(Exception):
    """Base class for all wallhue errors."""


class BufferSizeMismatch(WallhueError, ValueError):
    """Raised when a pixel buffer does not match its declared dimensions."""

    def __init__(self, actual: int, width: int, height: int, channels: int = 3):
        self.actual = actual
        self.width = width
        self.height = height
        self.expected = width * height * channels
        super().__init__(
            f"Buffer holds {actual} values but {width}x{height}x{channels} "
            f"requires {self.expected}"
        )


class InvalidHexColor(WallhueError, ValueError):
    """Raised when a color string is not a 6-digit hex RGB value."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid hex color: {value!r} (expected #RRGGBB)")


class EmptyClusterSet(WallhueError):
    """Raised when clustering produced no clusters (e.g. an empty image)."""


class InpaintingError(WallhueError):
    """Raised by inpainting providers when the external service fails."""
