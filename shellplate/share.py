"""
Shared-state parameter for the results view

The input form hands its record to the results view as a single
URL-encoded JSON query parameter, so a results page can be bookmarked.
"""

import json
from typing import Optional
from urllib.parse import quote, unquote

from pydantic import ValidationError

from .errors import DecodeError
from .models import LayoutInputs

PARAM_NAME = "inputs"


def encode_inputs(inputs: LayoutInputs) -> str:
    """Serialize a form record into the URL-encoded query parameter value"""
    return quote(inputs.model_dump_json(by_alias=True), safe="")


def decode_inputs(param: Optional[str]) -> LayoutInputs:
    """Decode the query parameter back into a form record"""
    if param is None or not param.strip():
        raise DecodeError(f"Missing '{PARAM_NAME}' parameter")
    try:
        data = json.loads(unquote(param))
    except ValueError as e:
        raise DecodeError(f"Malformed '{PARAM_NAME}' parameter: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Malformed '{PARAM_NAME}' parameter: expected an object")
    try:
        return LayoutInputs.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Malformed '{PARAM_NAME}' parameter: {e.error_count()} invalid field(s)") from e
