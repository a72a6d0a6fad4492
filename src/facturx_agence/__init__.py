"""facturx-agence : composition Factur-X des factures de l'agence.

FR: Point d'entrée du paquet. Les quatre opérations publiques sont des
    fonctions pures (sauf l'export, qui écrit un fichier) :
    compose_invoice_xml, validate_composed_xml, describe_profile et
    export_xml_as_file.
EN: Package entry point exposing the four public operations.
"""

from facturx_agence.export import (
    default_export_filename,
    export_xml_as_file,
    export_xml_to_stream,
)
from facturx_agence.generators.cii import compose_invoice_xml
from facturx_agence.models import (
    BankDetails,
    Buyer,
    ComposerOptions,
    Invoice,
    IssuerProfile,
    LineItem,
)
from facturx_agence.profiles import describe_profile
from facturx_agence.validators import ValidationResult, validate_composed_xml

__all__ = [
    "BankDetails",
    "Buyer",
    "ComposerOptions",
    "Invoice",
    "IssuerProfile",
    "LineItem",
    "ValidationResult",
    "compose_invoice_xml",
    "default_export_filename",
    "describe_profile",
    "export_xml_as_file",
    "export_xml_to_stream",
    "validate_composed_xml",
]
