"""Tabular summaries of a layout for display and CSV export."""

import pandas as pd

from .layout import round_half_up
from .models import PlateLayout, WeightCostSummary


def format_money(amount: float, currency: str) -> str:
    return f"{currency}{amount:.2f}"


def summary_frame(summary: WeightCostSummary, currency: str = "₹") -> pd.DataFrame:
    """Weight and cost of total, used and offcut plate"""
    rows = []
    for label, key in (("Total Plate", "total"), ("Used Plate", "used"), ("Offcut", "offcut")):
        weight = getattr(summary, f"{key}_weight")
        cost = getattr(summary, f"{key}_cost")
        rows.append({
            "Item": label,
            "Weight (kg)": round(weight, 2),
            "Cost": format_money(cost, currency),
        })
    return pd.DataFrame(rows)


def cutting_list_frame(layout: PlateLayout) -> pd.DataFrame:
    """One row per stock plate"""
    rows = []
    for p in layout.plates:
        rows.append({
            "Plate": p.index + 1,
            "Courses": p.units,
            "Developed Length (mm)": round_half_up(layout.developed_length),
            "Used Length (mm)": round_half_up(p.used_length),
            "Width (mm)": round_half_up(p.used_width),
            "Offcut (mm)": f"{round_half_up(p.offcut_length)} × {round_half_up(p.offcut_width)}",
        })
    return pd.DataFrame(rows)
