"""
Data models for the Shell Plate Layout tool

Pydantic models for inputs, derived layouts, and API request/response
validation and serialization.
"""

from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import List, Optional, Tuple, Any

from .config import settings
from .errors import InvalidInputError


class _Spec(BaseModel):
    """Frozen calculator input; bad values raise InvalidInputError"""

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            raise InvalidInputError(f"Values must be positive numbers: {fields}") from e


class VesselSpec(_Spec):
    """Cylindrical vessel shell to be rolled from plate (all mm)"""
    internal_diameter: float = Field(gt=0, allow_inf_nan=False)
    vessel_length: float = Field(gt=0, allow_inf_nan=False)
    plate_thickness: float = Field(gt=0, allow_inf_nan=False)

    class Config:
        frozen = True


class PlateSpec(_Spec):
    """Stock plate the shell courses are cut from"""
    stock_plate_width: float = Field(gt=0, allow_inf_nan=False, description="Plate width (mm)")
    stock_plate_length: float = Field(gt=0, allow_inf_nan=False, description="Plate length (mm)")
    material: str
    rate_per_kg: float = Field(gt=0, allow_inf_nan=False, description="Currency per kilogram")

    class Config:
        frozen = True


_NUMERIC_INPUTS = (
    "internal_dia",
    "vessel_length",
    "plate_thickness",
    "plate_width",
    "plate_length",
    "rate_per_kg",
)


class LayoutInputs(BaseModel):
    """
    Flat input record as filled in on the form

    This is the record handed from the input view to the results view, so
    the wire keys match the form field names. Numeric fields may still be
    empty here; to_specs() is where they are required.
    """
    internal_dia: Optional[float] = Field(None, alias="internalDia")
    vessel_length: Optional[float] = Field(None, alias="vesselLength")
    plate_thickness: Optional[float] = Field(None, alias="plateThickness")
    plate_width: Optional[float] = Field(None, alias="plateWidth")
    plate_length: Optional[float] = Field(None, alias="plateLength")
    material: str = "IS 2062 GR.B"
    rate_per_kg: Optional[float] = Field(None, alias="ratePerKg")

    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "internalDia": 2000,
                "vesselLength": 6000,
                "plateThickness": 20,
                "plateWidth": 2500,
                "plateLength": 12500,
                "material": "IS 2062 GR.B",
                "ratePerKg": 72.5
            }
        }

    @field_validator(*_NUMERIC_INPUTS, mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        # Cleared form fields arrive as empty strings
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def is_complete(self) -> bool:
        """True when every field has been filled in (the form's own check)"""
        return bool(self.material) and all(
            getattr(self, name) not in (None, 0) for name in _NUMERIC_INPUTS
        )

    def to_specs(self) -> Tuple[VesselSpec, PlateSpec]:
        """Split the record into vessel and plate specs, rejecting bad values"""
        if not self.is_complete():
            raise InvalidInputError("All fields must be filled out.")
        vessel = VesselSpec(
            internal_diameter=self.internal_dia,
            vessel_length=self.vessel_length,
            plate_thickness=self.plate_thickness,
        )
        plate = PlateSpec(
            stock_plate_width=self.plate_width,
            stock_plate_length=self.plate_length,
            material=self.material,
            rate_per_kg=self.rate_per_kg,
        )
        return vessel, plate

    @classmethod
    def from_specs(cls, vessel: VesselSpec, plate: PlateSpec) -> "LayoutInputs":
        return cls(
            internal_dia=vessel.internal_diameter,
            vessel_length=vessel.vessel_length,
            plate_thickness=vessel.plate_thickness,
            plate_width=plate.stock_plate_width,
            plate_length=plate.stock_plate_length,
            material=plate.material,
            rate_per_kg=plate.rate_per_kg,
        )


class PlateCut(BaseModel):
    """Cut pattern on one stock plate"""
    index: int
    units: int = Field(ge=0, description="Shell courses cut from this plate")
    used_length: float
    used_width: float
    offcut_length: float = Field(ge=0)
    offcut_width: float

    class Config:
        frozen = True


class PlateLayout(BaseModel):
    """How the shell courses are distributed over stock plates"""
    developed_length: float
    units_per_plate: int = Field(ge=1)
    total_units: int = Field(ge=1)
    num_plates: int = Field(ge=1)
    plate_width: float
    plate_length: float
    offcut_length: float = Field(ge=0, description="Remainder on a full plate (mm)")
    plates: Tuple[PlateCut, ...]

    class Config:
        frozen = True


class WeightCostSummary(BaseModel):
    """Volumes (mm³), weights (kg) and costs for total, used and offcut material"""
    total_volume: float
    used_volume: float
    offcut_volume: float
    total_weight: float
    used_weight: float
    offcut_weight: float
    total_cost: float
    used_cost: float
    offcut_cost: float

    class Config:
        frozen = True


class LayoutResult(BaseModel):
    """Calculator output"""
    layout: PlateLayout
    summary: WeightCostSummary

    class Config:
        frozen = True


# ============================================================================
# API MODELS
# ============================================================================

class MaterialInfo(BaseModel):
    """A selectable plate material"""
    name: str
    density: float = Field(description="kg/mm³")


class LayoutResponse(BaseModel):
    """Response for layout calculations"""
    success: bool = True
    material: str
    num_plates: int
    layout: PlateLayout
    summary: WeightCostSummary
    share: str = Field(description="URL-encoded inputs for the results view")
    message: Optional[str] = None


class ViewParams(BaseModel):
    """Presentation parameters for a rendered scene"""
    scale: float = Field(default_factory=lambda: settings.INITIAL_SCALE,
                         description="Pixels per millimetre, within MIN_SCALE..MAX_SCALE")
    offset_x: float = 0.0
    offset_y: float = 0.0

    @field_validator("scale")
    @classmethod
    def _scale_in_zoom_range(cls, value: float) -> float:
        if not settings.MIN_SCALE <= value <= settings.MAX_SCALE:
            raise ValueError(
                f"scale must be between {settings.MIN_SCALE} and {settings.MAX_SCALE}"
            )
        return value


class SceneRequest(BaseModel):
    """Request body for rendering a layout"""
    inputs: LayoutInputs
    view: ViewParams = Field(default_factory=ViewParams)


class SceneResponse(BaseModel):
    """Draw commands for one layout, in content space"""
    scale: float
    offset_x: float
    offset_y: float
    width: int
    height: int
    commands: List[dict]


class ErrorResponse(BaseModel):
    """Error response format"""
    success: bool = False
    error: str
    detail: Optional[str] = None
