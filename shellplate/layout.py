"""
Plate layout calculation for cylindrical vessel shells

Each shell course is cut as a strip of the developed (unrolled) length with
the stock plate's width, laid end to end along the plate's length. Courses
are stacked along the vessel axis, so a vessel needs
ceil(vessel_length / plate_width) of them.
"""

import logging
import math
from functools import lru_cache
from typing import Tuple

from .errors import InvalidInputError, LayoutCalculationError
from .materials import density_for
from .models import (
    LayoutInputs,
    LayoutResult,
    PlateCut,
    PlateLayout,
    PlateSpec,
    VesselSpec,
    WeightCostSummary,
)

logger = logging.getLogger("shellplate.layout")

# Plates up to this thickness get an allowance of one thickness, thicker
# plates one and a half
THICK_PLATE_LIMIT = 35.0
THICK_PLATE_ALLOWANCE_FACTOR = 1.5

VOLUME_TOLERANCE = 1e-9


def round_half_up(value: float) -> int:
    """Nearest integer, halves away from zero for positive values (like Math.round)"""
    return int(math.floor(value + 0.5))


def rolling_allowance(plate_thickness: float) -> float:
    """Processing/welding margin added to the mid-wall circumference"""
    if plate_thickness <= THICK_PLATE_LIMIT:
        return plate_thickness
    return THICK_PLATE_ALLOWANCE_FACTOR * plate_thickness


def developed_length(internal_diameter: float, plate_thickness: float) -> int:
    """
    Unrolled length of one shell course, in whole millimetres

    Mid-wall circumference plus the rolling allowance, rounded half up.
    """
    return round_half_up(
        (internal_diameter + plate_thickness) * math.pi + rolling_allowance(plate_thickness)
    )


def _plate_cuts(dl: float, units_per_plate: int, total_units: int, num_plates: int,
                plate: PlateSpec) -> Tuple[PlateCut, ...]:
    cuts = []
    remaining = total_units
    for i in range(num_plates):
        units = min(units_per_plate, remaining)
        remaining -= units
        used_length = units * dl
        cuts.append(PlateCut(
            index=i,
            units=units,
            used_length=used_length,
            used_width=plate.stock_plate_width,
            offcut_length=plate.stock_plate_length - used_length,
            offcut_width=plate.stock_plate_width,
        ))
    return tuple(cuts)


@lru_cache(maxsize=128)
def compute_layout(vessel: VesselSpec, plate: PlateSpec) -> LayoutResult:
    """
    Derive plate counts, offcut geometry, weights and costs

    Raises InvalidInputError for an unknown material or a plate too short to
    hold a single course. Results are cached on the (immutable) inputs.
    """
    density = density_for(plate.material)

    dl = developed_length(vessel.internal_diameter, vessel.plate_thickness)
    units_per_plate = math.floor(plate.stock_plate_length / dl)
    if units_per_plate < 1:
        logger.info(
            "Rejected layout: plate length %s mm shorter than developed length %s mm",
            plate.stock_plate_length, dl,
        )
        raise InvalidInputError(
            f"Plate length {plate.stock_plate_length:g} mm is shorter than "
            f"the developed length {dl} mm"
        )

    total_units = math.ceil(vessel.vessel_length / plate.stock_plate_width)
    num_plates = math.ceil(total_units / units_per_plate)
    offcut_length = plate.stock_plate_length - units_per_plate * dl

    W, L, t = plate.stock_plate_width, plate.stock_plate_length, vessel.plate_thickness
    total_volume = num_plates * L * W * t
    used_volume = total_units * dl * W * t
    offcut_volume = total_volume - used_volume
    if offcut_volume < -VOLUME_TOLERANCE * total_volume:
        raise LayoutCalculationError(
            f"Negative offcut volume {offcut_volume:g} mm³ "
            f"(total {total_volume:g}, used {used_volume:g})"
        )

    total_weight = total_volume * density
    used_weight = used_volume * density
    offcut_weight = offcut_volume * density

    summary = WeightCostSummary(
        total_volume=total_volume,
        used_volume=used_volume,
        offcut_volume=offcut_volume,
        total_weight=total_weight,
        used_weight=used_weight,
        offcut_weight=offcut_weight,
        total_cost=total_weight * plate.rate_per_kg,
        used_cost=used_weight * plate.rate_per_kg,
        offcut_cost=offcut_weight * plate.rate_per_kg,
    )
    layout = PlateLayout(
        developed_length=dl,
        units_per_plate=units_per_plate,
        total_units=total_units,
        num_plates=num_plates,
        plate_width=W,
        plate_length=L,
        offcut_length=offcut_length,
        plates=_plate_cuts(dl, units_per_plate, total_units, num_plates, plate),
    )
    logger.debug(
        "Layout for %s: DL=%s mm, %d course(s), %d per plate, %d plate(s)",
        plate.material, dl, total_units, units_per_plate, num_plates,
    )
    return LayoutResult(layout=layout, summary=summary)


def compute_from_inputs(inputs: LayoutInputs) -> LayoutResult:
    """Validate a form record and compute its layout"""
    vessel, plate = inputs.to_specs()
    return compute_layout(vessel, plate)
