"""Contrôles des documents Factur-X composés.

FR: validate_composed_xml() vérifie la présence des éléments requis,
    sans analyse XML.
EN: validate_composed_xml() checks for required elements, without XML
    parsing.
"""

from facturx_agence.validators.structure import (
    REQUIRED_ELEMENTS,
    ValidationResult,
    validate_composed_xml,
)

__all__ = ["REQUIRED_ELEMENTS", "ValidationResult", "validate_composed_xml"]
