from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from constants import TOOLTIP_OFFSET_X, TOOLTIP_OFFSET_Y
from data import VarianceRecord
from utils.time import month_name


@dataclass(frozen=True)
class PointerEvent:
    # pointer location in chart pixel coordinates
    page_x: float
    page_y: float


@dataclass(frozen=True)
class TooltipState:
    visible: bool = False
    content: str = ""
    position: Optional[tuple[float, float]] = None
    year: str = ""

    @classmethod
    def hidden(cls) -> "TooltipState":
        return cls()


def tooltip_html(record: VarianceRecord, base_temperature: float) -> str:
    """
    Tooltip body for one cell, e.g. '1753 - January<br>2.6°C<br>-6.1°C'.
    The last line is the deviation from the base temperature, always signed.
    """
    delta = record.temperature - base_temperature
    return (
        f"{record.year} - {month_name(record.month)}"
        f"<br>{record.temperature:.1f}°C"
        f"<br>{delta:+.1f}°C"
    )


def handle_pointer_enter(
    event: PointerEvent, record: VarianceRecord, base_temperature: float
) -> TooltipState:
    return TooltipState(
        visible=True,
        content=tooltip_html(record, base_temperature),
        position=(event.page_x + TOOLTIP_OFFSET_X, event.page_y + TOOLTIP_OFFSET_Y),
        year=str(record.year),
    )


def handle_pointer_leave(event: Optional[PointerEvent] = None) -> TooltipState:
    return TooltipState.hidden()
