from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, Iterable, Optional, Sequence

from plotly.colors import get_colorscale, sample_colorscale

from constants import (
    CHART_HEIGHT,
    CHART_WIDTH,
    COLOR_SCALE,
    LEGEND_TEMPERATURE_DOMAIN,
    LEGEND_WIDTH,
)

MONTHS_DESCENDING = list(range(11, -1, -1))

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _tick_range(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power < 0:
        inc = 10 ** (-power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10**power * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_range(start, stop, count * 2)
    return i1, i2, inc


def tick_values(start: float, stop: float, count: int = 10) -> list[float]:
    """
    Roughly `count` evenly spaced, human friendly values in [start, stop].

    Steps are 1, 2 or 5 times a power of ten. Negative increments stand for
    division so that decimal ticks come out exact (0.1 rather than 0.1000001).
    """
    if not count > 0:
        return []
    if start == stop:
        return [float(start)]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_range(start, stop, count)
    if i2 < i1:
        return []
    if inc < 0:
        ticks = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        ticks = [float((i1 + i) * inc) for i in range(i2 - i1 + 1)]
    return ticks[::-1] if reverse else ticks


class BandScale:
    """Discrete domain -> contiguous, equally wide bands of an output range."""

    def __init__(
        self,
        domain: Iterable[Hashable],
        output_range: tuple[float, float],
        padding: float = 0.0,
    ) -> None:
        self.domain = list(dict.fromkeys(domain))
        self.output_range = (float(output_range[0]), float(output_range[1]))
        self.padding = padding
        self._index = {value: i for i, value in enumerate(self.domain)}
        self._rescale()

    def _rescale(self) -> None:
        n = len(self.domain)
        r0, r1 = self.output_range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        inner = outer = self.padding
        self.step = (stop - start) / max(1, n - inner + outer * 2)
        start += (stop - start - self.step * (n - inner)) * 0.5
        self.bandwidth = self.step * (1 - inner)
        positions = [start + self.step * i for i in range(n)]
        if reverse:
            positions.reverse()
        self._positions = positions

    def __call__(self, value: Hashable) -> Optional[float]:
        i = self._index.get(value)
        return None if i is None else self._positions[i]

    def center(self, value: Hashable) -> Optional[float]:
        pos = self(value)
        return None if pos is None else pos + self.bandwidth / 2


class LinearScale:
    """Continuous numeric domain -> numeric range by linear interpolation."""

    def __init__(self, domain: tuple[float, float], output_range: tuple[float, float]) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.output_range = (float(output_range[0]), float(output_range[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.output_range
        if d1 == d0:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

class SequentialColorScale:
    """Continuous numeric domain -> colour sampled from a plotly colour scale."""

    def __init__(self, domain: tuple[float, float], colorscale: str = COLOR_SCALE) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.colorscale = get_colorscale(colorscale)

    def normalize(self, value: float) -> float:
        d0, d1 = self.domain
        if d1 == d0:
            return 0.5
        return min(1.0, max(0.0, (value - d0) / (d1 - d0)))

    def __call__(self, value: float) -> str:
        return sample_colorscale(self.colorscale, [self.normalize(value)])[0]

    def many(self, values: Sequence[float]) -> list[str]:
        if not values:
            return []
        return sample_colorscale(self.colorscale, [self.normalize(v) for v in values])

    def ticks(self, count: int = 10) -> list[float]:
        return tick_values(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class ScaleSet:
    year_to_x: BandScale
    month_to_y: BandScale
    temperature_to_color: SequentialColorScale
    temperature_to_legend_x: LinearScale


def build_scales(
    dataset,
    *,
    width: float = CHART_WIDTH,
    height: float = CHART_HEIGHT,
    legend_width: float = LEGEND_WIDTH,
    legend_domain: tuple[float, float] = LEGEND_TEMPERATURE_DOMAIN,
    colorscale: str = COLOR_SCALE,
) -> ScaleSet:
    if dataset.is_empty:
        raise ValueError("Cannot build scales for an empty dataset.")
    return ScaleSet(
        year_to_x=BandScale(sorted(dataset.years()), (0, width), padding=0),
        month_to_y=BandScale(MONTHS_DESCENDING, (height, 0), padding=0),
        temperature_to_color=SequentialColorScale(dataset.temperature_extent(), colorscale),
        temperature_to_legend_x=LinearScale(legend_domain, (0, legend_width)),
    )
