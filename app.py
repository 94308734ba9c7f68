# app.py — Shell Plate Layout: input form and results view
from __future__ import annotations

import logging

import streamlit as st

from shellplate.config import settings
from shellplate.errors import DecodeError, InvalidInputError
from shellplate.layout import compute_from_inputs, round_half_up
from shellplate.logging_config import setup_logging
from shellplate.materials import material_names
from shellplate.models import LayoutInputs
from shellplate.plotting import scene_figure
from shellplate.render import ViewController
from shellplate.reports import cutting_list_frame, format_money, summary_frame
from shellplate.share import PARAM_NAME, decode_inputs, encode_inputs

# ============================================================================
# PAGE SETUP
# ============================================================================
st.set_page_config(page_title=settings.APP_NAME, layout="wide", page_icon="🛢️")

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("shellplate.app")

PAN_STEP_PX = 50


# ============================================================================
# STATE MANAGEMENT
# ============================================================================
def _init_state():
    """Initialize session state with all required keys"""
    defaults = {
        "form_error": "",
        "view": None,
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)
    if st.session_state.view is None:
        st.session_state.view = ViewController(config=settings)


_init_state()


# ============================================================================
# INPUT FORM
# ============================================================================
def render_input_form():
    """Collect vessel and plate inputs and hand them to the results view"""
    st.title("Plate Cutting Layout")

    if st.session_state.form_error:
        st.error(st.session_state.form_error)

    materials = material_names()
    with st.form("layout_inputs"):
        col1, col2 = st.columns(2)
        with col1:
            internal_dia = st.number_input("Internal Diameter (mm):", min_value=0.0, value=None, key="in_internal_dia")
            plate_thickness = st.number_input("Plate Thickness (mm):", min_value=0.0, value=None, key="in_thickness")
            plate_length = st.number_input("Plate Length (mm):", min_value=0.0, value=None, key="in_plate_length")
            rate_per_kg = st.number_input("Rate Per Kg:", min_value=0.0, value=None, key="in_rate")
        with col2:
            vessel_length = st.number_input("Vessel Length (mm):", min_value=0.0, value=None, key="in_vessel_length")
            plate_width = st.number_input("Plate Width (mm):", min_value=0.0, value=None, key="in_plate_width")
            material = st.selectbox(
                "Material:",
                materials,
                index=materials.index(settings.DEFAULT_MATERIAL) if settings.DEFAULT_MATERIAL in materials else 0,
                key="in_material",
            )

        submitted = st.form_submit_button("Generate Layout", type="primary", use_container_width=True)

    if not submitted:
        return

    inputs = LayoutInputs(
        internal_dia=internal_dia,
        vessel_length=vessel_length,
        plate_thickness=plate_thickness,
        plate_width=plate_width,
        plate_length=plate_length,
        material=material,
        rate_per_kg=rate_per_kg,
    )
    try:
        compute_from_inputs(inputs)
    except InvalidInputError as e:
        st.session_state.form_error = str(e)
        st.rerun()

    st.session_state.form_error = ""
    st.query_params[PARAM_NAME] = encode_inputs(inputs)
    st.rerun()


# ============================================================================
# RESULTS
# ============================================================================
def render_view_controls(view: ViewController):
    """Zoom and pan buttons; each redraws only when the view actually changed"""
    cols = st.columns(6)
    redraw = False
    with cols[0]:
        if st.button("Zoom In", use_container_width=True):
            redraw = view.zoom_in()
    with cols[1]:
        if st.button("Zoom Out", use_container_width=True):
            redraw = view.zoom_out()

    # Each press shifts the view by PAN_STEP_PX
    pans = [("←", -PAN_STEP_PX, 0), ("→", PAN_STEP_PX, 0), ("↑", 0, -PAN_STEP_PX), ("↓", 0, PAN_STEP_PX)]
    for col, (label, dx, dy) in zip(cols[2:], pans):
        with col:
            if st.button(label, use_container_width=True, key=f"pan_{label}"):
                redraw = view.pan_by(dx, dy)
    if redraw:
        st.rerun()


def render_results(param: str):
    """Results view for a shared `inputs` parameter"""
    try:
        inputs = decode_inputs(param)
    except DecodeError as e:
        logger.info("Results view without usable inputs: %s", e)
        st.info("Loading...")
        return

    try:
        result = compute_from_inputs(inputs)
    except InvalidInputError as e:
        st.error(f"❌ {e}")
        if st.button("Back to Input"):
            del st.query_params[PARAM_NAME]
            st.rerun()
        return

    layout, weights = result.layout, result.summary
    view: ViewController = st.session_state.view
    view.set_layout(layout)
    currency = settings.CURRENCY_SYMBOL

    col_out, col_canvas = st.columns(2)
    with col_out:
        st.title("Cutting Layout Results")
        st.markdown(f"**Material:** {inputs.material}")
        st.markdown(f"**Number of Used Plates:** {layout.num_plates}")
        st.markdown(
            f"**Total Plate Weight:** {weights.total_weight:.2f} kg | "
            f"Cost: {format_money(weights.total_cost, currency)}"
        )
        st.markdown(
            f"**Used Plate Weight:** {weights.used_weight:.2f} kg | "
            f"Cost: {format_money(weights.used_cost, currency)}"
        )
        st.markdown(
            f"**Offcut Weight:** {weights.offcut_weight:.2f} kg | "
            f"Cost: {format_money(weights.offcut_cost, currency)}"
        )

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Developed Length", f"{round_half_up(layout.developed_length)} mm")
        with col2:
            st.metric("Courses per Plate", layout.units_per_plate)
        with col3:
            st.metric("Courses Required", layout.total_units)

        st.dataframe(summary_frame(weights, currency), use_container_width=True, hide_index=True)

        with st.expander("📋 Cutting List"):
            cutting_list = cutting_list_frame(layout)
            st.dataframe(cutting_list, use_container_width=True, hide_index=True)
            st.download_button(
                "Download CSV",
                cutting_list.to_csv(index=False),
                file_name="cutting_list.csv",
                mime="text/csv",
            )

        if st.button("Back to Input"):
            del st.query_params[PARAM_NAME]
            st.rerun()

    with col_canvas:
        st.plotly_chart(scene_figure(view.scene()), use_container_width=True)
        render_view_controls(view)


# ============================================================================
# MAIN APPLICATION
# ============================================================================
def main():
    """Main application entry point"""
    param = st.query_params.get(PARAM_NAME)
    if param is None:
        render_input_form()
    else:
        render_results(param)


if __name__ == "__main__":
    main()
