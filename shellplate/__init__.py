"""
Shell Plate Layout

Plate cutting layout, weight and cost estimation for cylindrical vessel shells.
"""

__version__ = "1.0.0"
