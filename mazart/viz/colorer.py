import math
from typing import Optional

from mazart.core.maze import Cell
from mazart.viz.colors import RGB, get_palette


class Colorer:
    """
    Maps an integer cell property to a colour.

    palette          - property value indexes the palette directly (wraps)
    palette-gradient - [lo, hi] is stretched across the palette
    gradient         - [lo, hi] blends linearly from start_color to end_color

    Gradients put start_color at lo and end_color at hi. Every range needs
    lo <= hi, so clamp an empty metric maximum before building one.
    """

    PALETTE = "palette"
    PALETTE_GRADIENT = "palette-gradient"
    GRADIENT = "gradient"

    # Connection colouring methods
    NEAREST = "nearest"
    AVERAGE = "average"

    def __init__(self, kind: str, prop: int, lo: int = 0, hi: int = 0,
                 start_color: RGB = None, end_color: RGB = None, conn_method: str = AVERAGE):
        if kind not in (self.PALETTE, self.PALETTE_GRADIENT, self.GRADIENT):
            raise ValueError(f"Unknown colorer kind '{kind}'")
        if lo > hi:
            raise ValueError(f"Empty property range [{lo}, {hi}]")
        if kind == self.GRADIENT and (start_color is None or end_color is None):
            raise ValueError("Gradient colorer needs start and end colors")
        if conn_method not in (self.NEAREST, self.AVERAGE):
            raise ValueError(f"Unknown connection method '{conn_method}'")
        self.kind = kind
        self.prop = prop
        self.lo = lo
        self.hi = hi
        self.start_color = start_color
        self.end_color = end_color
        self.conn_method = conn_method

    @classmethod
    def palette(cls, prop: int, **kwargs) -> 'Colorer':
        return cls(cls.PALETTE, prop, **kwargs)

    @classmethod
    def palette_gradient(cls, prop: int, lo: int, hi: int, **kwargs) -> 'Colorer':
        return cls(cls.PALETTE_GRADIENT, prop, lo, hi, **kwargs)

    @classmethod
    def gradient(cls, start_color: RGB, end_color: RGB, prop: int, lo: int, hi: int, **kwargs) -> 'Colorer':
        return cls(cls.GRADIENT, prop, lo, hi, start_color=start_color, end_color=end_color, **kwargs)

    def _fraction(self, value: int) -> float:
        # Always < 1.0 so it can scale a palette index
        span = self.hi - self.lo + 1
        if value > self.hi:
            return (self.hi - self.lo) / span
        if value < self.lo:
            return 0.0
        return (value - self.lo) / span

    def cell_color(self, cell: Cell) -> Optional[RGB]:
        value = cell.get_property(self.prop)
        palette = get_palette()

        if self.kind == self.PALETTE:
            if value < 0:
                return None
            return tuple(int(c) for c in palette[value % len(palette)])

        frac = self._fraction(value)
        if self.kind == self.PALETTE_GRADIENT:
            return tuple(int(c) for c in palette[int(len(palette) * frac)])

        return tuple(
            int(s * (1.0 - frac) + e * frac)
            for s, e in zip(self.start_color, self.end_color)
        )

    def conn_color(self, a: Cell, b: Cell) -> Optional[RGB]:
        a_color = self.cell_color(a)
        b_color = self.cell_color(b)
        if a_color is None or b_color is None:
            return None
        if self.conn_method == self.NEAREST:
            return a_color if a.get_property(self.prop) <= b.get_property(self.prop) else b_color
        # Root mean square blend
        return tuple(
            int(math.sqrt((av * av + bv * bv) / 2.0))
            for av, bv in zip(a_color, b_color)
        )

    def apply(self, config, connections: bool = True):
        """Installs this colorer as the cell (and optionally connection) colour source."""
        config.cell_color_gen = self.cell_color
        if connections:
            config.conn_color_gen = self.conn_color
        return config
