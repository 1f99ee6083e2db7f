from typing import NamedTuple, Sequence, Tuple

DEFAULT_TOLERANCE = 30


class Color(NamedTuple):
    """An opaque RGB color, one byte per channel."""
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parses ``#RRGGBB`` (the leading ``#`` is optional)."""
        h = value.strip().lstrip("#")
        if len(h) != 6:
            raise ValueError(f"Expected a #RRGGBB color, got {value!r}")
        try:
            return cls(*(int(h[i : i + 2], 16) for i in (0, 2, 4)))
        except ValueError:
            raise ValueError(f"Expected a #RRGGBB color, got {value!r}") from None

    @classmethod
    def coerce(cls, value) -> "Color":
        """Accepts a Color, a hex string or any RGB(A) sequence."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if len(value) < 3:
            raise ValueError(f"Expected an RGB triple, got {value!r}")
        channels = [int(c) for c in value[:3]]
        if any(c < 0 or c > 255 for c in channels):
            raise ValueError(f"Color channels must be 0-255, got {value!r}")
        return cls(*channels)

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def rgba(self, alpha: int = 255) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, alpha)


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)

DEFAULT_COLOR = Color.from_hex("#1A1F2C")

PALETTE = [
    ("Ink", DEFAULT_COLOR),
    ("Lavender", Color.from_hex("#9b87f5")),
    ("Purple", Color.from_hex("#7E69AB")),
    ("Coral", Color.from_hex("#ff5757")),
    ("Green", Color.from_hex("#4CAF50")),
    ("Blue", Color.from_hex("#2196F3")),
    ("Gold", Color.from_hex("#FFD700")),
]


def color_match(c1: Sequence[int], c2: Sequence[int], tolerance: int = DEFAULT_TOLERANCE) -> bool:
    """True when every RGB channel differs by at most ``tolerance``. Alpha is ignored."""
    return (
        abs(int(c1[0]) - int(c2[0])) <= tolerance
        and abs(int(c1[1]) - int(c2[1])) <= tolerance
        and abs(int(c1[2]) - int(c2[2])) <= tolerance
    )
