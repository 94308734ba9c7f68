"""
Shared test fixtures — sample vessel/plate inputs and an API test client.
"""

import pytest
from fastapi.testclient import TestClient

from shellplate.layout import compute_layout
from shellplate.main import app
from shellplate.models import LayoutInputs, PlateSpec, VesselSpec


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def vessel():
    """2 m ID, 6 m long shell in 20 mm plate: developed length 6366 mm."""
    return VesselSpec(internal_diameter=2000, vessel_length=6000, plate_thickness=20)


@pytest.fixture
def plate():
    """2500 x 13000 plate: two courses per plate, 268 mm offcut."""
    return PlateSpec(
        stock_plate_width=2500,
        stock_plate_length=13000,
        material="IS 2062 GR.B",
        rate_per_kg=72.5,
    )


@pytest.fixture
def inputs(vessel, plate):
    return LayoutInputs.from_specs(vessel, plate)


@pytest.fixture
def form_payload():
    """Input record as the form sends it."""
    return {
        "internalDia": 2000,
        "vesselLength": 6000,
        "plateThickness": 20,
        "plateWidth": 2500,
        "plateLength": 13000,
        "material": "IS 2062 GR.B",
        "ratePerKg": 72.5,
    }


@pytest.fixture
def layout(vessel, plate):
    return compute_layout(vessel, plate).layout
