"""Exceptions raised by the layout calculator, renderer and share codec."""


class LayoutError(Exception):
    """Base class for shell plate layout failures"""
    pass


class InvalidInputError(LayoutError, ValueError):
    """Missing or non-positive field, unknown material, or plate too short"""
    pass


class DecodeError(LayoutError, ValueError):
    """Shared-state parameter is absent or malformed"""
    pass


class LayoutCalculationError(LayoutError, RuntimeError):
    """Derived quantities are inconsistent (e.g. negative offcut volume)"""
    pass
