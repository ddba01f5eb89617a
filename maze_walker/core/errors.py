class MazeError(Exception):
    """Base class for every error raised by the maze engine."""


class InvalidDimensions(MazeError, ValueError):
    def __init__(self, width, height):
        super().__init__(f"Grid dimensions must be >= 1, got {width}x{height}")
        self.width = width
        self.height = height


class InvalidEdge(MazeError):
    """Wall operation on two cells that do not share a wall."""

    def __init__(self, a, b):
        super().__init__(f"{a} and {b} are not neighbours")
        self.a = a
        self.b = b


class UnknownAlgorithm(MazeError, ValueError):
    def __init__(self, family: str, name: str, choices):
        super().__init__(f"Unsupported {family} '{name}' (choose from: {', '.join(choices)})")
        self.family = family
        self.name = name


class GridBusy(MazeError, RuntimeError):
    """Another live step sequence is still advancing this grid."""
