"""
Plate material densities

Densities are in kg/mm³ so that volumes computed from millimetre dimensions
convert straight to kilograms.
"""

from typing import Dict, List

from .errors import InvalidInputError

# Carbon steels 7850 kg/m³, austenitic stainless 7930-8000 kg/m³
MATERIAL_DENSITIES: Dict[str, float] = {
    "IS 2062 GR.A": 7.85e-6,
    "IS 2062 GR.B": 7.85e-6,
    "IS 2062 GR.C": 7.85e-6,
    "SA 516 GR.60": 7.85e-6,
    "SA 516 GR.70": 7.85e-6,
    "SA 537 CL.1": 7.85e-6,
    "SA 240 SS304": 7.93e-6,
    "SA 240 SS304L": 7.93e-6,
    "SA 240 SS316": 8.00e-6,
    "SA 240 SS316L": 8.00e-6,
}


def material_names() -> List[str]:
    """Materials offered in the input form, in display order"""
    return list(MATERIAL_DENSITIES)


def density_for(material: str) -> float:
    """Look up the density of a material; unknown names are rejected"""
    try:
        return MATERIAL_DENSITIES[material]
    except KeyError:
        raise InvalidInputError(f"Unknown material '{material}'") from None
