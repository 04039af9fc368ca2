from __future__ import annotations

# Remote dataset: {"baseTemperature": float, "monthlyVariance": [{year, month (1-12), variance}]}
DATASET_URL: str = (
    "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/master/global-temperature.json"
)
REQUEST_TIMEOUT_SECONDS: float = 10.0

PAGE_TITLE: str = "Global Temperature Heat Map"

# Outer figure size in px; the plot area is what remains inside the margins.
FIGURE_WIDTH: int = 1400
FIGURE_HEIGHT: int = 500
MARGIN: dict[str, int] = {"top": 20, "right": 20, "bottom": 30, "left": 70}
CHART_WIDTH: int = FIGURE_WIDTH - MARGIN["left"] - MARGIN["right"]
CHART_HEIGHT: int = FIGURE_HEIGHT - MARGIN["top"] - MARGIN["bottom"]

# Cells are drawn slightly larger than their band to hide sub-pixel seams.
CELL_OVERLAP_X: float = 0.6
CELL_OVERLAP_Y: float = 0.5
HIGHLIGHT_LINE_WIDTH: int = 2

COLOR_SCALE: str = "Inferno"

LEGEND_WIDTH: int = 400
LEGEND_HEIGHT: int = 20
LEGEND_TICK_SIZE: int = 10
# Fixed presentation range for the legend axis, not derived from the data.
LEGEND_TEMPERATURE_DOMAIN: tuple[float, float] = (2.8, 12.8)

TOOLTIP_OFFSET_X: float = -50
TOOLTIP_OFFSET_Y: float = -100
TOOLTIP_OPACITY: float = 0.9
TOOLTIP_BACKGROUND: str = "lightgrey"
TOOLTIP_BORDER: str = "black"
