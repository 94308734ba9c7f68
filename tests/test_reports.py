"""Tests for the pandas summaries (reports.py) and the plotly figure (plotting.py)."""

import plotly.graph_objects as go
import pytest

from shellplate.layout import compute_layout
from shellplate.models import PlateSpec
from shellplate.plotting import scene_figure
from shellplate.render import RectCommand, TextCommand, ViewState, render_layout
from shellplate.reports import cutting_list_frame, format_money, summary_frame


def test_format_money():
    assert format_money(1234.5, "₹") == "₹1234.50"
    assert format_money(0.004, "$") == "$0.00"


def test_summary_frame(vessel, plate):
    summary = compute_layout(vessel, plate).summary
    df = summary_frame(summary, "₹")
    assert list(df["Item"]) == ["Total Plate", "Used Plate", "Offcut"]
    assert list(df["Weight (kg)"]) == [
        round(summary.total_weight, 2),
        round(summary.used_weight, 2),
        round(summary.offcut_weight, 2),
    ]
    assert df["Weight (kg)"].iloc[0] == 10205.0
    assert df["Cost"].iloc[0] == "₹739862.50"


def test_cutting_list_frame(layout):
    df = cutting_list_frame(layout)
    assert len(df) == layout.num_plates
    assert list(df["Plate"]) == [1, 2]
    assert list(df["Courses"]) == [2, 1]
    assert list(df["Offcut (mm)"]) == ["268 × 2500", "6634 × 2500"]
    assert "Plate,Courses" in df.to_csv(index=False)


def test_cutting_list_rounds_halves_up(vessel, plate):
    half_mm = PlateSpec(**{**plate.model_dump(), "stock_plate_length": 12500.5})
    df = cutting_list_frame(compute_layout(vessel, half_mm).layout)
    assert list(df["Offcut (mm)"]) == ["6135 × 2500"] * 3


def test_scene_figure(layout):
    scene = render_layout(layout, ViewState())
    fig = scene_figure(scene, title="Layout")
    assert isinstance(fig, go.Figure)

    hatched = [c for c in scene.commands if isinstance(c, RectCommand) and c.hatch]
    texts = [c for c in scene.commands if isinstance(c, TextCommand)]
    assert len(fig.data) == len(hatched)
    assert all(trace.text == "Offcut Area" for trace in fig.data)
    assert len(fig.layout.annotations) == len(texts)
    assert len(fig.layout.shapes) == len(scene.commands) - len(hatched) - len(texts)


def test_scene_figure_viewport_follows_zoom_and_pan(layout):
    fig = scene_figure(render_layout(layout, ViewState(scale=0.05, offset_x=100, offset_y=0)))
    assert list(fig.layout.xaxis.range) == pytest.approx([-2000, 14000])
    # y axis runs downwards like a canvas
    assert list(fig.layout.yaxis.range) == pytest.approx([12000, 0])
    assert (fig.layout.width, fig.layout.height) == (800, 600)


def test_annotation_fonts_are_screen_size(layout):
    fig = scene_figure(render_layout(layout, ViewState(scale=0.02)))
    assert {round(a.font.size, 6) for a in fig.layout.annotations} == {12}
