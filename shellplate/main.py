"""
FastAPI Backend for Shell Plate Layout

REST API providing endpoints for materials, layout calculation and
layout rendering.
Run with: uvicorn shellplate.main:app --reload
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import settings
from .errors import DecodeError, InvalidInputError
from .layout import compute_from_inputs
from .logging_config import setup_logging
from .materials import MATERIAL_DENSITIES
from .models import (
    ErrorResponse,
    LayoutInputs,
    LayoutResponse,
    MaterialInfo,
    SceneRequest,
    SceneResponse,
)
from .render import ViewState, command_to_dict, render_layout
from .share import decode_inputs, encode_inputs

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("shellplate.api")

# Initialize FastAPI app
app = FastAPI(
    title="Shell Plate Layout API",
    description="Plate cutting layout, weight and cost for cylindrical vessel shells",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS for web UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root():
    """API root endpoint"""
    return {
        "message": f"Shell Plate Layout API v{__version__}",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "materials_count": len(MATERIAL_DENSITIES)
    }


# ============================================================================
# MATERIALS
# ============================================================================

@app.get("/api/materials", response_model=List[MaterialInfo], tags=["Materials"])
async def list_materials():
    """Materials offered in the input form, with densities in kg/mm³"""
    return [MaterialInfo(name=name, density=d) for name, d in MATERIAL_DENSITIES.items()]


# ============================================================================
# LAYOUT ENDPOINTS
# ============================================================================

def _layout_response(inputs: LayoutInputs) -> LayoutResponse:
    result = compute_from_inputs(inputs)
    layout = result.layout
    return LayoutResponse(
        material=inputs.material,
        num_plates=layout.num_plates,
        layout=layout,
        summary=result.summary,
        share=encode_inputs(inputs),
        message=(
            f"{layout.total_units} course(s) of {layout.developed_length:g} mm "
            f"on {layout.num_plates} plate(s)"
        ),
    )


@app.post("/api/layout", response_model=LayoutResponse, tags=["Layout"])
async def calculate_layout(inputs: LayoutInputs):
    """
    Calculate the plate layout for a vessel shell

    - **internalDia / vesselLength / plateThickness**: vessel (mm)
    - **plateWidth / plateLength**: stock plate (mm)
    - **material**: one of /api/materials
    - **ratePerKg**: price per kilogram

    Returns plate counts, per-plate offcut, weights and costs, and the
    `share` parameter that reopens the same results.
    """
    return _layout_response(inputs)


@app.get("/api/layout", response_model=LayoutResponse, tags=["Layout"])
async def shared_layout(inputs: Optional[str] = Query(None, description="URL-encoded input record")):
    """Recalculate a layout from a shared `inputs` parameter"""
    return _layout_response(decode_inputs(inputs))


@app.post("/api/layout/scene", response_model=SceneResponse, tags=["Layout"])
async def layout_scene(request: SceneRequest):
    """
    Render a layout to draw commands

    Coordinates are in millimetres; map them to pixels with
    `pixel = offset + content * scale`.
    """
    result = compute_from_inputs(request.inputs)
    view = ViewState(
        scale=request.view.scale,
        offset_x=request.view.offset_x,
        offset_y=request.view.offset_y,
    )
    scene = render_layout(result.layout, view)
    return SceneResponse(
        scale=scene.transform.scale,
        offset_x=scene.transform.offset_x,
        offset_y=scene.transform.offset_y,
        width=scene.width,
        height=scene.height,
        commands=[command_to_dict(c) for c in scene.commands],
    )


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.info("Invalid input on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error="Invalid input",
            detail=str(exc)
        ).model_dump()
    )


@app.exception_handler(DecodeError)
async def decode_error_handler(request: Request, exc: DecodeError):
    logger.info("Undecodable shared inputs on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(
            error="Could not decode inputs",
            detail=str(exc)
        ).model_dump()
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("shellplate.main:app", host="0.0.0.0", port=8000, reload=True)
