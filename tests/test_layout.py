"""
Tests for the plate layout calculator (layout.py).

Tests:
1-4.  Developed length: worked example, 35 mm allowance boundary, half-up rounding
5-8.  Plate counts and per-plate offcut
9-11. Weight/cost balance
12-16. Rejections: short plate, unknown material, missing/non-positive fields and specs
17-20. Monotonicity, idempotence, cached results stay intact
"""

import math

import pytest
from pydantic import ValidationError

from shellplate.errors import InvalidInputError
from shellplate.layout import (
    compute_from_inputs,
    compute_layout,
    developed_length,
    rolling_allowance,
    round_half_up,
)
from shellplate.materials import MATERIAL_DENSITIES, density_for
from shellplate.models import LayoutInputs, PlateSpec, VesselSpec


def _plate(**overrides):
    values = dict(stock_plate_width=2500, stock_plate_length=13000,
                  material="IS 2062 GR.B", rate_per_kg=72.5)
    values.update(overrides)
    return PlateSpec(**values)


def _vessel(**overrides):
    values = dict(internal_diameter=2000, vessel_length=6000, plate_thickness=20)
    values.update(overrides)
    return VesselSpec(**values)


# --- Developed length ---

def test_developed_length_example():
    # (2000 + 20) * pi = 6346.02, plus a 20 mm allowance
    assert developed_length(2000, 20) == 6366


def test_allowance_boundary_at_35mm():
    assert rolling_allowance(35) == 35
    assert rolling_allowance(35.0001) == pytest.approx(52.50015)
    assert developed_length(1000, 35) == 3287
    assert developed_length(1000, 35.0001) == 3304


def test_round_half_up_at_half_boundaries():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(12500.5) == 12501
    assert round_half_up(6366.49) == 6366


def test_developed_length_rounds_half_up(monkeypatch):
    # With pi = 3, (1.5 + 0.5) * 3 + 0.5 = 6.5 exactly; round() would give 6
    monkeypatch.setattr(math, "pi", 3.0)
    assert developed_length(1.5, 0.5) == 7


# --- Plate counts ---

def test_plate_counts(vessel, plate):
    layout = compute_layout(vessel, plate).layout
    assert layout.developed_length == 6366
    assert layout.units_per_plate == 2
    assert layout.total_units == 3
    assert layout.num_plates == 2
    assert layout.offcut_length == pytest.approx(13000 - 2 * 6366)


def test_per_plate_cuts(layout):
    first, last = layout.plates
    assert (first.units, last.units) == (2, 1)
    assert first.used_length == pytest.approx(12732)
    assert first.offcut_length == pytest.approx(268)
    assert last.used_length == pytest.approx(6366)
    assert last.offcut_length == pytest.approx(6634)
    assert all(p.used_width == 2500 for p in layout.plates)


def test_exact_fit_leaves_no_offcut():
    layout = compute_layout(_vessel(vessel_length=5000), _plate(stock_plate_length=12732)).layout
    assert layout.num_plates == 1
    assert layout.offcut_length == 0
    assert layout.plates[0].offcut_length == 0


def test_single_course_vessel_needs_one_plate():
    layout = compute_layout(_vessel(vessel_length=10), _plate()).layout
    assert layout.total_units == 1
    assert layout.num_plates == 1


# --- Weights and costs ---

def test_weights_and_costs(vessel, plate):
    summary = compute_layout(vessel, plate).summary
    assert summary.total_volume == pytest.approx(2 * 13000 * 2500 * 20)
    assert summary.used_volume == pytest.approx(3 * 6366 * 2500 * 20)
    assert summary.total_weight == pytest.approx(10205.0)
    assert summary.used_weight == pytest.approx(7495.965)
    assert summary.offcut_weight == pytest.approx(2709.035)
    assert summary.total_cost == pytest.approx(10205.0 * 72.5)


@pytest.mark.parametrize("diameter,length,thickness,width,plate_length", [
    (2000, 6000, 20, 2500, 13000),
    (1500, 12000, 12, 2000, 10000),
    (3200, 9000, 40, 2500, 12500),
    (800, 2500, 8, 1500, 6300),
    (4500, 18000, 60, 3000, 15000),
])
def test_used_plus_offcut_equals_total(diameter, length, thickness, width, plate_length):
    summary = compute_layout(
        _vessel(internal_diameter=diameter, vessel_length=length, plate_thickness=thickness),
        _plate(stock_plate_width=width, stock_plate_length=plate_length),
    ).summary
    assert summary.offcut_volume >= 0
    assert summary.used_weight + summary.offcut_weight == pytest.approx(summary.total_weight, rel=1e-6)
    assert summary.used_cost + summary.offcut_cost == pytest.approx(summary.total_cost, rel=1e-6)


def test_stainless_is_heavier(vessel):
    carbon = compute_layout(vessel, _plate()).summary
    stainless = compute_layout(vessel, _plate(material="SA 240 SS316")).summary
    assert stainless.total_weight > carbon.total_weight


# --- Rejections ---

def test_plate_shorter_than_course_is_rejected(vessel):
    with pytest.raises(InvalidInputError, match="shorter than"):
        compute_layout(vessel, _plate(stock_plate_length=5000))


def test_known_material_resolves():
    assert density_for("IS 2062 GR.B") == MATERIAL_DENSITIES["IS 2062 GR.B"]


def test_unknown_material_is_rejected(vessel):
    with pytest.raises(InvalidInputError, match="UNKNOWN"):
        density_for("UNKNOWN")
    with pytest.raises(InvalidInputError):
        compute_layout(vessel, _plate(material="UNKNOWN"))


def test_missing_field_is_rejected(inputs):
    with pytest.raises(InvalidInputError, match="All fields must be filled out"):
        compute_from_inputs(inputs.model_copy(update={"plate_width": None}))


def test_zero_field_counts_as_missing(inputs):
    with pytest.raises(InvalidInputError, match="All fields must be filled out"):
        compute_from_inputs(inputs.model_copy(update={"rate_per_kg": 0}))


def test_negative_field_is_rejected(form_payload):
    form_payload["plateThickness"] = -5
    with pytest.raises(InvalidInputError, match="plate_thickness"):
        compute_from_inputs(LayoutInputs.model_validate(form_payload))


def test_blank_form_field_is_missing(form_payload):
    form_payload["vesselLength"] = ""
    inputs = LayoutInputs.model_validate(form_payload)
    assert inputs.vessel_length is None
    assert not inputs.is_complete()


@pytest.mark.parametrize("build,field", [
    (lambda: _vessel(plate_thickness=-5), "plate_thickness"),
    (lambda: _vessel(internal_diameter=0), "internal_diameter"),
    (lambda: _plate(rate_per_kg=float("nan")), "rate_per_kg"),
    (lambda: _plate(stock_plate_width=-1), "stock_plate_width"),
])
def test_spec_with_bad_value_is_rejected(build, field):
    with pytest.raises(InvalidInputError, match=field):
        build()


# --- Properties ---

def test_plate_count_never_decreases_with_vessel_length(plate):
    counts = [
        compute_layout(_vessel(vessel_length=length), plate).layout.num_plates
        for length in range(500, 40001, 500)
    ]
    assert min(counts) >= 1
    assert counts == sorted(counts)


def test_compute_layout_is_idempotent(vessel, plate):
    first = compute_layout(vessel, plate)
    second = compute_layout(_vessel(), _plate())
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_compute_from_inputs_matches_specs(inputs, vessel, plate):
    assert compute_from_inputs(inputs) == compute_layout(vessel, plate)


def test_cached_result_cannot_be_altered(vessel, plate):
    first = compute_layout(vessel, plate)
    assert isinstance(first.layout.plates, tuple)
    with pytest.raises(AttributeError):
        first.layout.plates.pop()
    with pytest.raises(ValidationError):
        first.layout.plates = ()
    again = compute_layout(vessel, plate)
    assert len(again.layout.plates) == again.layout.num_plates == 2
