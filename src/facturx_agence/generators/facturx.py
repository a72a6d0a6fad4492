"""Intégration du XML Factur-X dans un PDF/A-3.

FR: Embarque le XML CII composé dans le PDF de la facture, via la
    bibliothèque factur-x (Akretion). Le PDF source est produit ailleurs
    (export PDF de la facture) ; seul l'assemblage hybride est fait ici.
EN: Embeds the composed CII XML into the invoice PDF through the factur-x
    library. The source PDF is produced elsewhere.
"""

import logging

from facturx import generate_from_binary

from facturx_agence.conf import get_setting
from facturx_agence.errors import PDFEmbeddingError
from facturx_agence.models.enums import Profile

logger = logging.getLogger(__name__)

# Mapping des profils vers les niveaux attendus par la lib factur-x
_PROFILE_MAP = {
    Profile.MINIMUM: "minimum",
    Profile.BASIC: "basic",
    Profile.EN16931: "en16931",
    Profile.EXTENDED: "extended",
}


def embed_in_pdf(
    pdf_bytes: bytes,
    xml: str,
    profile: str | None = None,
    lang: str | None = None,
) -> bytes:
    """Produit un PDF Factur-X (PDF/A-3 + XML CII embarqué).

    FR: Le contrôle XSD de la bibliothèque est désactivé : le document
        composé place les lignes après le bloc de règlement, ce que le
        XSD refuse. La validation structurelle reste celle de
        validate_composed_xml().
    EN: The library's XSD check is disabled since the composed document
        places line items after the settlement block.

    Args:
        pdf_bytes: Le PDF de la facture.
        xml: Le XML composé par compose_invoice_xml().
        profile: Profil Factur-X (défaut : paramètre DEFAULT_PROFILE).
        lang: Langue des métadonnées PDF (défaut : DEFAULT_LANGUAGE).

    Returns:
        Les octets du PDF Factur-X.

    Raises:
        ValueError: Si le profil est inconnu.
        PDFEmbeddingError: Si la bibliothèque factur-x échoue.
    """
    profile = (profile or get_setting("DEFAULT_PROFILE")).upper()
    level = _PROFILE_MAP.get(profile)
    if not level:
        msg = (
            f"Profil inconnu : {profile}. "
            f"Profils disponibles : {', '.join(_PROFILE_MAP)}"
        )
        raise ValueError(msg)

    logger.info("Intégration Factur-X profil %s dans le PDF", level)
    try:
        return generate_from_binary(
            pdf_bytes,
            xml.encode("utf-8"),
            flavor="factur-x",
            level=level,
            check_xsd=False,
            lang=lang or get_setting("DEFAULT_LANGUAGE"),
        )
    except Exception as exc:
        msg = f"Échec de l'intégration du XML dans le PDF : {exc}"
        raise PDFEmbeddingError(msg) from exc
