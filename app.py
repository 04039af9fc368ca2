from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

from constants import PAGE_TITLE
from view import HeatMapView

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("heat_map")

VIEW_KEY = "heat_map_view"
CHART_KEY = "heat_map_chart"


def _new_view() -> HeatMapView:
    view = HeatMapView()
    view.load()
    return view


def _get_view() -> HeatMapView:
    # One load per browser session; reruns reuse the same view
    if VIEW_KEY not in st.session_state:
        st.session_state[VIEW_KEY] = _new_view()
    return st.session_state[VIEW_KEY]


def _reload_view() -> None:
    old = st.session_state.get(VIEW_KEY)
    if old is not None:
        old.dispose()
    st.session_state.pop(CHART_KEY, None)
    st.session_state[VIEW_KEY] = _new_view()


def _selected_cell_index(state) -> Optional[int]:
    """First selected point of the heat map chart state, or None."""
    if not state:
        return None
    points = state["selection"]["points"]
    if not points:
        return None
    return int(points[0]["point_index"])


def main() -> None:
    st.set_page_config(page_title=PAGE_TITLE, page_icon="🌡️", layout="wide")
    st.title(PAGE_TITLE)

    if st.button("Reload data"):
        _reload_view()
    view = _get_view()

    if view.error is not None:
        st.error(f"Could not load the temperature dataset: {view.error}")
        return
    if not view.is_rendered:
        st.info("The dataset has no records to display.")
        return

    st.caption(view.description)
    view.select_cell(_selected_cell_index(st.session_state.get(CHART_KEY)))

    st.plotly_chart(
        view.chart,
        use_container_width=False,
        on_select="rerun",
        selection_mode="points",
        key=CHART_KEY,
    )
    st.plotly_chart(view.legend, use_container_width=False)


if __name__ == "__main__":
    main()
