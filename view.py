from __future__ import annotations

import logging
from typing import Callable, Optional

import plotly.graph_objects as go

from charts import Cell, build_cells, draw_heat_map, draw_legend
from data import Dataset, HeatMapDataError, VarianceRecord, describe_dataset, load_dataset
from scales import ScaleSet, build_scales
from tooltip import PointerEvent, TooltipState, handle_pointer_enter, handle_pointer_leave

logger = logging.getLogger("heat_map.view")


class HeatMapView:
    """
    Component-local state of the heat map page.

    Holds the loaded dataset, its scales, the tooltip and the highlighted
    record, and owns the two figures it draws into. State only changes
    through `load` and the pointer handlers.
    """

    def __init__(self) -> None:
        self.dataset: Optional[Dataset] = None
        self.scales: Optional[ScaleSet] = None
        self.error: Optional[HeatMapDataError] = None
        self.tooltip = TooltipState.hidden()
        self.highlighted: Optional[VarianceRecord] = None
        self.chart = go.Figure()
        self.legend = go.Figure()
        self._cells: list[Cell] = []
        self._alive = True

    @property
    def is_rendered(self) -> bool:
        return self.scales is not None

    @property
    def cells(self) -> list[Cell]:
        return list(self._cells)

    @property
    def description(self) -> Optional[str]:
        if self.dataset is None or self.dataset.is_empty:
            return None
        return describe_dataset(self.dataset)

    def dispose(self) -> None:
        self._alive = False

    def load(self, fetch: Optional[Callable[[], Dataset]] = None) -> bool:
        """Fetch the dataset once and render it. Returns True when a chart was drawn."""
        try:
            dataset = fetch() if fetch is not None else load_dataset()
        except HeatMapDataError as exc:
            logger.error("Dataset load failed: %s", exc)
            if self._alive:
                self.error = exc
            return False
        if not self._alive:
            logger.debug("View disposed while loading; dropping dataset")
            return False

        self.error = None
        self.dataset = dataset
        self.tooltip = TooltipState.hidden()
        self.highlighted = None
        if dataset.is_empty:
            logger.warning("Dataset has no records; nothing to draw")
            self.scales = None
            self._cells = []
            return False
        self.scales = build_scales(dataset)
        self._cells = build_cells(dataset, self.scales)
        self.render()
        return True

    def render(self) -> None:
        if self.dataset is None or self.scales is None:
            return
        draw_heat_map(
            self.chart,
            self.dataset,
            self.scales,
            tooltip=self.tooltip,
            highlighted=self.highlighted,
            cells=self._cells,
        )
        draw_legend(self.legend, self.scales)

    def pointer_enter(self, event: PointerEvent, record: VarianceRecord) -> TooltipState:
        if self.dataset is None:
            return self.tooltip
        self.highlighted = record
        self.tooltip = handle_pointer_enter(event, record, self.dataset.base_temperature)
        self.render()
        return self.tooltip

    def pointer_leave(self, event: Optional[PointerEvent] = None) -> TooltipState:
        self.highlighted = None
        self.tooltip = handle_pointer_leave(event)
        self.render()
        return self.tooltip

    def select_cell(self, index: Optional[int]) -> TooltipState:
        """Map a chart point selection (cell index, or None when cleared) onto enter/leave."""
        if index is None or not 0 <= index < len(self._cells):
            if self.highlighted is not None or self.tooltip.visible:
                return self.pointer_leave()
            return self.tooltip
        cell = self._cells[index]
        if cell.record == self.highlighted:
            return self.tooltip
        cx, cy = cell.center
        return self.pointer_enter(PointerEvent(page_x=cx, page_y=cy), cell.record)
