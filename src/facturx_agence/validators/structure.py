"""Contrôle structurel du XML Factur-X composé.

FR: Vérification textuelle (sans parseur) de la présence des éléments
    obligatoires. C'est un contrôle de premier niveau avant l'envoi ou
    l'archivage, pas une validation XSD ni schématron : la conformité
    réglementaire reste vérifiée par la plateforme destinataire.
EN: Textual (parser-free) presence check of the required elements. A
    pre-flight smoke test, not an XSD or schematron validation.
"""

import logging

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

REQUIRED_ELEMENTS = (
    "rsm:CrossIndustryInvoice",
    "rsm:ExchangedDocumentContext",
    "rsm:ExchangedDocument",
    "ram:ID",
    "ram:TypeCode",
    "ram:SellerTradeParty",
    "ram:BuyerTradeParty",
    "ram:GrandTotalAmount",
)

MISSING_ELEMENT_MESSAGE = "Élément requis manquant: {element}"


class ValidationResult(BaseModel):
    """Résultat du contrôle structurel."""

    valid: bool = Field(..., description="Aucun élément manquant / No missing element")
    errors: list[str] = Field(
        default_factory=list,
        description="Messages d'erreur, dans l'ordre des contrôles / Error messages",
    )


def _contains_element(xml: str, qualified_name: str) -> bool:
    """Cherche une balise ouvrante, préfixée ou non."""
    local_name = qualified_name.split(":", 1)[1]
    return f"<{qualified_name}" in xml or f"<{local_name}" in xml


def validate_composed_xml(xml: object) -> ValidationResult:
    """Vérifie la présence des éléments requis dans un XML de facture.

    FR: Ne lève jamais d'exception ; une entrée vide ou qui n'est pas une
        chaîne échoue sur tous les contrôles.
    EN: Never raises; empty or non-string input fails every check.

    Args:
        xml: Le document à contrôler, en général issu de
            compose_invoice_xml().

    Returns:
        ValidationResult avec valid=True si aucun élément ne manque.
    """
    text = xml if isinstance(xml, str) else ""
    errors = [
        MISSING_ELEMENT_MESSAGE.format(element=element)
        for element in REQUIRED_ELEMENTS
        if not _contains_element(text, element)
    ]
    if errors:
        logger.warning(
            "Contrôle structurel Factur-X : %d élément(s) manquant(s)", len(errors)
        )
    return ValidationResult(valid=not errors, errors=errors)
