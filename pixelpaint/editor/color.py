"""
Color value type for PixelPaint.

Colors are immutable 8-bit RGBA values. Two colors are equal only when all
four channels match exactly. The UI consumes two string forms:

- paint_string: "rgb(r, g, b)", the value a brush is set to
- hex_string: "#rrggbb", the value shown by the color picker
"""

from dataclasses import dataclass

from PySide6.QtGui import QColor


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA color."""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel!r}")

    @classmethod
    def from_hex(cls, hex_string: str) -> "Color":
        """
        Parse "#rrggbb" (leading # optional) into an opaque color.

        Raises:
            ValueError: If the string is not six hex digits.
        """
        digits = hex_string.strip().lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Invalid hex color: {hex_string!r}")
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @classmethod
    def from_qcolor(cls, color: QColor) -> "Color":
        return cls(color.red(), color.green(), color.blue(), color.alpha())

    def to_qcolor(self) -> QColor:
        return QColor(self.r, self.g, self.b, self.a)

    def with_alpha(self, alpha: int) -> "Color":
        return Color(self.r, self.g, self.b, alpha)

    @property
    def paint_string(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    @property
    def hex_string(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def __str__(self) -> str:
        return self.paint_string


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
TRANSPARENT = Color(0, 0, 0, 0)
