"""Conversion des enregistrements de la base vers les modèles.

FR: Le module de facturation stocke les factures, lignes et paramètres
    d'agence sous forme de lignes plates (colonnes client_*, tva_*…).
    Ces fonctions les projettent sur les modèles Pydantic attendus par
    le compositeur.
EN: The invoicing module stores invoices, lines and agency settings as
    flat rows. These functions map them onto the Pydantic models.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from facturx_agence.errors import PayloadError
from facturx_agence.models.invoice import Buyer, Invoice, LineItem
from facturx_agence.models.issuer import BankDetails, IssuerProfile

logger = logging.getLogger(__name__)

_PAYLOAD_SECTIONS = ("invoice", "items", "agency")


def _validation_messages(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]


def invoice_from_record(row: Mapping[str, Any]) -> Invoice:
    """Construit une facture depuis une ligne de la table des factures.

    Raises:
        pydantic.ValidationError: Si le numéro ou la date sont absents
            ou illisibles.
    """
    buyer = Buyer(
        name=row.get("client_name"),
        address=row.get("client_address"),
        postal_code=row.get("client_postal_code"),
        city=row.get("client_city"),
        country=row.get("client_country"),
        vat_number=row.get("client_vat_number"),
        siret=row.get("client_siret"),
    )
    data: dict[str, Any] = {
        "number": row.get("invoice_number"),
        "issue_date": row.get("invoice_date"),
        "due_date": row.get("due_date"),
        "payment_method": row.get("payment_method"),
        "payment_terms": row.get("payment_terms"),
        "notes": row.get("notes"),
        "buyer": buyer,
        "subtotal_ht": row.get("subtotal_ht"),
        "tva_amount": row.get("tva_amount"),
        "total_ttc": row.get("total_ttc"),
        "amount_due": row.get("amount_due"),
    }
    if row.get("invoice_type"):
        data["invoice_type"] = row["invoice_type"]
    if row.get("currency"):
        data["currency"] = row["currency"]
    return Invoice.model_validate(data)


def line_item_from_record(row: Mapping[str, Any]) -> LineItem:
    """Construit une ligne de facture depuis la table des lignes."""
    return LineItem(
        description=row.get("description"),
        detailed_description=row.get("detailed_description"),
        code=row.get("code"),
        unit=row.get("unit"),
        quantity=row.get("quantity"),
        unit_price=row.get("unit_price"),
        tva_rate=row.get("tva_rate"),
        amount_ht=row.get("amount_ht"),
        amount_tva=row.get("amount_tva"),
    )


def issuer_from_agency(row: Mapping[str, Any]) -> IssuerProfile:
    """Construit le profil émetteur depuis les paramètres de l'agence.

    FR: Le pays de l'agence est toujours « France » dans l'application ;
        les coordonnées bancaires ne sont jointes que si l'une d'elles
        est renseignée.
    EN: The agency country is always "France"; bank details are attached
        only when one of them is set.
    """
    bank = None
    if row.get("iban") or row.get("bic") or row.get("bank_name"):
        bank = BankDetails(
            bank_name=row.get("bank_name"),
            iban=row.get("iban"),
            bic=row.get("bic"),
        )
    return IssuerProfile(
        name=row.get("name") or "",
        legal_form=row.get("legal_form"),
        siret=row.get("siret") or "",
        vat_number=row.get("vat_number"),
        address=row.get("address") or "",
        city=row.get("city") or "",
        postal_code=row.get("postal_code") or "",
        country="France",
        email=row.get("email"),
        phone=row.get("phone"),
        rcs_city=row.get("rcs_city"),
        capital_social=row.get("capital_social"),
        bank=bank,
    )


def load_payload(
    payload: Mapping[str, Any],
) -> tuple[Invoice, list[LineItem], IssuerProfile]:
    """Convertit un document JSON {invoice, items, agency} en modèles.

    Args:
        payload: Dictionnaire contenant les enregistrements bruts.

    Returns:
        Le triplet (facture, lignes, émetteur) prêt pour la composition.

    Raises:
        PayloadError: Si une section manque ou ne peut être convertie.
    """
    missing = [section for section in _PAYLOAD_SECTIONS if section not in payload]
    if missing:
        msg = f"Sections manquantes dans les données : {', '.join(missing)}"
        raise PayloadError(msg, errors=missing)

    items = payload["items"] or []
    if not isinstance(items, Sequence) or isinstance(items, str):
        msg = "La section 'items' doit être une liste de lignes"
        raise PayloadError(msg)

    try:
        invoice = invoice_from_record(payload["invoice"])
        lines = [line_item_from_record(row) for row in items]
        issuer = issuer_from_agency(payload["agency"])
    except ValidationError as exc:
        errors = _validation_messages(exc)
        msg = f"Données de facture invalides ({len(errors)} erreur(s))"
        raise PayloadError(msg, errors=errors) from exc
    except (AttributeError, TypeError) as exc:
        msg = f"Enregistrement illisible : {exc}"
        raise PayloadError(msg) from exc

    logger.debug(
        "Données chargées pour la facture %s (%d ligne(s))",
        invoice.number,
        len(lines),
    )
    return invoice, lines, issuer
