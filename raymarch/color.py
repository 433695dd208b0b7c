#color.py


def _clamp01(c):
    return min(1.0, max(0.0, c))


class Color:
    """
    RGB colour with unbounded float channels.
    Channels are only forced into [0, 1] by clamp() / enhance_contrast(),
    which the renderer applies after averaging samples.
    """
    __slots__ = ('r', 'g', 'b')

    def __init__(self, r=0.0, g=0.0, b=0.0):
        self.r = float(r)
        self.g = float(g)
        self.b = float(b)

    def __add__(self, other):
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other):
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def clamp(self):
        return Color(_clamp01(self.r), _clamp01(self.g), _clamp01(self.b))

    def gamma_correct(self, gamma=2.2):
        # negative channels have no real root; treat them as black
        inv = 1.0 / gamma
        return Color(max(0.0, self.r) ** inv,
                     max(0.0, self.g) ** inv,
                     max(0.0, self.b) ** inv)

    def enhance_contrast(self, contrast=1.2):
        return Color(_clamp01((self.r - 0.5) * contrast + 0.5),
                     _clamp01((self.g - 0.5) * contrast + 0.5),
                     _clamp01((self.b - 0.5) * contrast + 0.5))

    def luminance(self):
        return 0.299 * self.r + 0.587 * self.g + 0.114 * self.b

    def is_black(self):
        return self.r < 1e-6 and self.g < 1e-6 and self.b < 1e-6

    def as_tuple(self):
        return (self.r, self.g, self.b)

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.r == other.r and self.g == other.g and self.b == other.b

    def __hash__(self):
        return hash((self.r, self.g, self.b))

    def __repr__(self):
        return f"Color({self.r!r}, {self.g!r}, {self.b!r})"


BLACK = Color(0.0, 0.0, 0.0)
