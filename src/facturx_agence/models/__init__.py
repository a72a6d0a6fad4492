"""Modèles de données Pydantic pour la composition Factur-X."""

from facturx_agence.models.invoice import Buyer, Invoice, LineItem, TaxSummary
from facturx_agence.models.issuer import BankDetails, IssuerProfile
from facturx_agence.models.options import ComposerOptions
from facturx_agence.models.records import (
    invoice_from_record,
    issuer_from_agency,
    line_item_from_record,
    load_payload,
)

__all__ = [
    "BankDetails",
    "Buyer",
    "ComposerOptions",
    "Invoice",
    "IssuerProfile",
    "LineItem",
    "TaxSummary",
    "invoice_from_record",
    "issuer_from_agency",
    "line_item_from_record",
    "load_payload",
]
