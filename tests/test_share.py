"""Tests for the shared-state query parameter (share.py)."""

import json
from urllib.parse import quote, unquote

import pytest

from shellplate.errors import DecodeError
from shellplate.models import LayoutInputs
from shellplate.share import decode_inputs, encode_inputs


def test_round_trip(inputs):
    assert decode_inputs(encode_inputs(inputs)) == inputs


def test_round_trip_keeps_fractional_values(inputs):
    odd = inputs.model_copy(update={"rate_per_kg": 0.1 + 0.2, "internal_dia": 1234.5678})
    assert decode_inputs(encode_inputs(odd)) == odd


def test_encoded_parameter_is_url_safe(inputs):
    encoded = encode_inputs(inputs)
    for ch in '{}":, ':
        assert ch not in encoded


def test_encoded_parameter_uses_form_keys(inputs):
    data = json.loads(unquote(encode_inputs(inputs)))
    assert set(data) == {"internalDia", "vesselLength", "plateThickness", "plateWidth",
                         "plateLength", "material", "ratePerKg"}


def test_decodes_form_record(form_payload):
    inputs = decode_inputs(quote(json.dumps(form_payload)))
    assert inputs.internal_dia == 2000
    assert inputs.material == "IS 2062 GR.B"


def test_decodes_already_unquoted_value(form_payload):
    # Web frameworks hand query values over already percent-decoded
    assert decode_inputs(json.dumps(form_payload)).plate_length == 13000


def test_incomplete_record_still_decodes(form_payload):
    form_payload["ratePerKg"] = ""
    inputs = decode_inputs(quote(json.dumps(form_payload)))
    assert inputs.rate_per_kg is None


@pytest.mark.parametrize("param", [None, "", "   "])
def test_absent_parameter(param):
    with pytest.raises(DecodeError, match="Missing"):
        decode_inputs(param)


@pytest.mark.parametrize("param", [
    "%7Bnot-json",
    quote("[1, 2, 3]"),
    quote('"just a string"'),
    quote(json.dumps({"internalDia": "wide"})),
])
def test_malformed_parameter(param):
    with pytest.raises(DecodeError, match="Malformed"):
        decode_inputs(param)
