from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import plotly.graph_objects as go

from constants import (
    CELL_OVERLAP_X,
    CELL_OVERLAP_Y,
    CHART_HEIGHT,
    CHART_WIDTH,
    FIGURE_HEIGHT,
    FIGURE_WIDTH,
    HIGHLIGHT_LINE_WIDTH,
    LEGEND_HEIGHT,
    LEGEND_TICK_SIZE,
    LEGEND_WIDTH,
    MARGIN,
    TOOLTIP_BACKGROUND,
    TOOLTIP_BORDER,
    TOOLTIP_OFFSET_X,
    TOOLTIP_OFFSET_Y,
    TOOLTIP_OPACITY,
)
from data import Dataset, VarianceRecord
from scales import ScaleSet
from tooltip import TooltipState, tooltip_html
from utils.time import month_name

CELL_TRACE_NAME = "cells"


@dataclass(frozen=True)
class Cell:
    record: VarianceRecord
    x: float
    y: float
    width: float
    height: float
    fill: str

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


def build_cells(dataset: Dataset, scales: ScaleSet) -> list[Cell]:
    """One rectangle per record, placed by the year/month bands and coloured by temperature."""
    width = scales.year_to_x.bandwidth + CELL_OVERLAP_X
    height = scales.month_to_y.bandwidth + CELL_OVERLAP_Y
    fills = scales.temperature_to_color.many([r.temperature for r in dataset.records])
    return [
        Cell(
            record=r,
            x=scales.year_to_x(r.year),
            y=scales.month_to_y(r.month),
            width=width,
            height=height,
            fill=fill,
        )
        for r, fill in zip(dataset.records, fills)
    ]


def _clear(fig: go.Figure) -> None:
    fig.data = []
    fig.layout.shapes = []
    fig.layout.annotations = []


def draw_heat_map(
    fig: go.Figure,
    dataset: Dataset,
    scales: ScaleSet,
    *,
    tooltip: Optional[TooltipState] = None,
    highlighted: Optional[VarianceRecord] = None,
    cells: Optional[list[Cell]] = None,
) -> go.Figure:
    _clear(fig)
    if cells is None:
        cells = build_cells(dataset, scales)

    # Bars in pixel space: base is the top edge (y axis is reversed), y the height
    fig.add_trace(
        go.Bar(
            name=CELL_TRACE_NAME,
            x=[c.x + c.width / 2 for c in cells],
            y=[c.height for c in cells],
            base=[c.y for c in cells],
            width=[c.width for c in cells],
            marker=dict(color=[c.fill for c in cells], line=dict(width=0)),
            customdata=[[c.record.year, c.record.month, c.record.temperature] for c in cells],
            hovertext=[tooltip_html(c.record, dataset.base_temperature) for c in cells],
            hovertemplate="%{hovertext}<extra></extra>",
            # selection only drives the outline; no cell is dimmed
            selected=dict(marker=dict(opacity=1)),
            unselected=dict(marker=dict(opacity=1)),
            showlegend=False,
        )
    )

    if highlighted is not None:
        x0 = scales.year_to_x(highlighted.year)
        y0 = scales.month_to_y(highlighted.month)
        if x0 is not None and y0 is not None:
            fig.add_shape(
                type="rect",
                xref="x",
                yref="y",
                x0=x0,
                x1=x0 + scales.year_to_x.bandwidth + CELL_OVERLAP_X,
                y0=y0,
                y1=y0 + scales.month_to_y.bandwidth + CELL_OVERLAP_Y,
                line=dict(color="black", width=HIGHLIGHT_LINE_WIDTH),
                fillcolor="rgba(0,0,0,0)",
                layer="above",
            )

    if tooltip is not None and tooltip.visible and tooltip.position is not None:
        # Anchored at the pointer (always inside the axes), offset in screen px;
        # yshift points up
        tx, ty = tooltip.position
        fig.add_annotation(
            name="tooltip",
            xref="x",
            yref="y",
            x=tx - TOOLTIP_OFFSET_X,
            y=ty - TOOLTIP_OFFSET_Y,
            xshift=TOOLTIP_OFFSET_X,
            yshift=-TOOLTIP_OFFSET_Y,
            text=tooltip.content,
            showarrow=False,
            xanchor="left",
            yanchor="top",
            align="left",
            bgcolor=TOOLTIP_BACKGROUND,
            bordercolor=TOOLTIP_BORDER,
            borderwidth=1,
            borderpad=5,
            opacity=TOOLTIP_OPACITY,
        )

    # Only decades on the year axis
    years = [y for y in scales.year_to_x.domain if y % 10 == 0]
    months = scales.month_to_y.domain
    fig.update_layout(
        template="simple_white",
        width=FIGURE_WIDTH,
        height=FIGURE_HEIGHT,
        margin=dict(l=MARGIN["left"], r=MARGIN["right"], t=MARGIN["top"], b=MARGIN["bottom"]),
        bargap=0,
        hovermode="closest",
        clickmode="event+select",
        showlegend=False,
    )
    fig.update_xaxes(
        range=[0, CHART_WIDTH],
        tickvals=[scales.year_to_x.center(y) for y in years],
        ticktext=[str(y) for y in years],
        ticks="outside",
        showgrid=False,
        zeroline=False,
        fixedrange=True,
    )
    fig.update_yaxes(
        range=[CHART_HEIGHT, 0],
        tickvals=[scales.month_to_y.center(m) for m in months],
        ticktext=[month_name(m) for m in months],
        ticks="outside",
        showgrid=False,
        zeroline=False,
        fixedrange=True,
    )
    return fig


def draw_legend(fig: go.Figure, scales: ScaleSet, *, width: int = CHART_WIDTH) -> go.Figure:
    """
    Colour legend: one swatch per colour-scale tick, laid side by side across
    LEGEND_WIDTH, with a temperature axis underneath. The axis positions come
    from the fixed legend temperature range, not from the data extent.
    """
    _clear(fig)
    color = scales.temperature_to_color
    ticks = color.ticks()
    swatch_width = LEGEND_WIDTH / len(ticks) if ticks else 0
    for i, tick in enumerate(ticks):
        fig.add_shape(
            type="rect",
            xref="x",
            yref="y",
            x0=i * swatch_width,
            x1=(i + 1) * swatch_width,
            y0=0,
            y1=LEGEND_HEIGHT,
            fillcolor=color(tick),
            line=dict(width=0),
            layer="below",
        )

    margin = dict(l=10, r=10, t=0, b=LEGEND_TICK_SIZE + 20)
    fig.update_layout(
        template="simple_white",
        width=width,
        height=LEGEND_HEIGHT + margin["t"] + margin["b"],
        margin=margin,
        showlegend=False,
    )
    fig.update_xaxes(
        range=[0, width - margin["l"] - margin["r"]],
        tickvals=[scales.temperature_to_legend_x(t) for t in ticks],
        ticktext=[f"{t:.1f}" for t in ticks],
        ticks="outside",
        ticklen=LEGEND_TICK_SIZE,
        showgrid=False,
        zeroline=False,
        fixedrange=True,
    )
    fig.update_yaxes(range=[LEGEND_HEIGHT, 0], visible=False, fixedrange=True)
    return fig
