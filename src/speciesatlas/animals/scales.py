"""Band and linear scales for laying out the speed chart.

Both scales follow the d3-scale conventions so that the chart geometry
matches what a browser-rendered version of the same chart would produce.
"""

import math
from collections.abc import Iterable, Sequence

# Thresholds for picking 1, 2, 5 or 10 as the tick step multiplier
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
    """Return the tick step for [start, stop] split into roughly ``count`` ticks.

    Positive results are a step size; negative results are the inverse of a
    fractional step (``-10`` means a step of 0.1).
    """
    if count <= 0:
        return 0.0
    step = (stop - start) / count
    if step <= 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


class LinearScale:
    """Continuous mapping from a numeric domain onto a pixel range."""

    def __init__(self, domain: tuple[float, float], output_range: tuple[float, float]) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(output_range[0]), float(output_range[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def nice(self, count: int = 10) -> "LinearScale":
        """Extend the domain outward to round values; returns self."""
        start, stop = self.domain
        reverse = stop < start
        if reverse:
            start, stop = stop, start

        previous_step = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == previous_step:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            previous_step = step

        start, stop = start + 0.0, stop + 0.0  # drop negative zero
        self.domain = (stop, start) if reverse else (start, stop)
        return self

    def ticks(self, count: int = 10) -> list[float]:
        """Round tick values inside the domain."""
        start, stop = sorted(self.domain)
        step = tick_increment(start, stop, count)
        if step > 0:
            first, last = math.ceil(start / step), math.floor(stop / step)
            return [i * step for i in range(first, last + 1)]
        if step < 0:
            first, last = math.ceil(start * -step), math.floor(stop * -step)
            return [i / -step for i in range(first, last + 1)]
        return [start]


class BandScale:
    """Categorical scale dividing a range into evenly spaced bands.

    The domain is de-duplicated: a repeated key keeps the position of its
    first occurrence.
    """

    def __init__(
        self,
        domain: Iterable[str],
        output_range: tuple[float, float],
        padding: float = 0.0,
        align: float = 0.5,
    ) -> None:
        self.domain: list[str] = list(dict.fromkeys(domain))
        self.range = (float(output_range[0]), float(output_range[1]))
        self.padding_inner = padding
        self.padding_outer = padding
        self.align = align
        self._index = {key: i for i, key in enumerate(self.domain)}
        self._rescale()

    def _rescale(self) -> None:
        n = len(self.domain)
        start, stop = self.range
        reverse = stop < start
        if reverse:
            start, stop = stop, start
        self.step = (stop - start) / max(1, n - self.padding_inner + self.padding_outer * 2)
        start += (stop - start - self.step * (n - self.padding_inner)) * self.align
        self.bandwidth = self.step * (1 - self.padding_inner)
        positions = [start + self.step * i for i in range(n)]
        if reverse:
            positions.reverse()
        self._positions: Sequence[float] = positions

    def __call__(self, key: str) -> float | None:
        index = self._index.get(key)
        if index is None:
            return None
        return self._positions[index]

    def center(self, key: str) -> float | None:
        """Midpoint of the band for ``key``."""
        position = self(key)
        if position is None:
            return None
        return position + self.bandwidth / 2
