"""Composition du XML Factur-X et intégration PDF."""

from facturx_agence.generators.cii import compose_invoice_xml, tax_breakdown
from facturx_agence.generators.facturx import embed_in_pdf

__all__ = [
    "compose_invoice_xml",
    "embed_in_pdf",
    "tax_breakdown",
]
