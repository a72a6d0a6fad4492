"""Tests unitaires de la conversion des enregistrements de la base.

FR: Vérifie la projection des lignes plates (factures, lignes, agence)
    sur les modèles, et le chargement d'un document JSON complet.
EN: Verifies the mapping of flat rows onto the models, and the loading
    of a complete JSON payload.
"""

from datetime import date
from decimal import Decimal

import pytest

from facturx_agence.errors import PayloadError
from facturx_agence.generators.cii import compose_invoice_xml
from facturx_agence.models import (
    invoice_from_record,
    issuer_from_agency,
    line_item_from_record,
    load_payload,
)
from facturx_agence.validators import validate_composed_xml


@pytest.fixture
def invoice_row() -> dict:
    """Ligne de la table des factures."""
    return {
        "id": "4b1c0d9e",
        "workspace_id": "ws-1",
        "invoice_number": "FA-2026-0042",
        "invoice_type": "credit_note",
        "status": "draft",
        "client_name": "Client SAS",
        "client_address": "5 avenue de la République",
        "client_city": "Paris",
        "client_postal_code": "75011",
        "client_country": "France",
        "client_siret": "98765432100034",
        "client_vat_number": "FR98987654321",
        "invoice_date": "2026-09-15",
        "due_date": "",
        "subtotal_ht": 5000,
        "tva_amount": 1000,
        "total_ttc": 6000,
        "amount_due": 6000,
        "currency": "EUR",
        "payment_terms": "À réception",
        "payment_method": "cheque",
        "notes": None,
    }


@pytest.fixture
def item_row() -> dict:
    """Ligne de la table des lignes de facture."""
    return {
        "item_type": "phase",
        "code": "APS",
        "description": "Avant-projet sommaire",
        "detailed_description": None,
        "quantity": 1,
        "unit": "forfait",
        "unit_price": 5000,
        "discount_percentage": 0,
        "tva_rate": 20,
        "amount_ht": 5000,
        "amount_tva": 1000,
        "amount_ttc": 6000,
        "sort_order": 0,
    }


@pytest.fixture
def agency_row() -> dict:
    """Paramètres de l'agence."""
    return {
        "name": "Atelier Dupont",
        "siret": "12345678900012",
        "vat_number": "FR12123456789",
        "address": "12 rue des Architectes",
        "city": "Lyon",
        "postal_code": 69002,
        "email": "contact@atelier-dupont.fr",
        "iban": "FR7612345678901234567890123",
        "bic": None,
        "bank_name": None,
    }


class TestRecordMapping:
    """Tests de projection des enregistrements."""

    def test_invoice_from_record(self, invoice_row: dict) -> None:
        invoice = invoice_from_record(invoice_row)

        assert invoice.number == "FA-2026-0042"
        assert invoice.is_credit_note
        assert invoice.issue_date == date(2026, 9, 15)
        assert invoice.due_date is None
        assert invoice.payment_method == "cheque"
        assert invoice.buyer.name == "Client SAS"
        assert invoice.buyer.siret == "98765432100034"
        assert invoice.subtotal_ht == Decimal("5000")
        assert invoice.total_ttc == Decimal("6000")

    def test_invoice_defaults(self) -> None:
        """Type et devise absents prennent les valeurs par défaut."""
        invoice = invoice_from_record(
            {"invoice_number": "FA-1", "invoice_date": "2026-01-02"}
        )
        assert invoice.invoice_type == "standard"
        assert invoice.currency == "EUR"
        assert invoice.buyer.name is None

    def test_line_item_from_record(self, item_row: dict) -> None:
        item = line_item_from_record(item_row)

        assert item.code == "APS"
        assert item.unit == "forfait"
        assert item.tva_rate == Decimal("20")
        assert item.amount_tva == Decimal("1000")

    def test_issuer_from_agency(self, agency_row: dict) -> None:
        issuer = issuer_from_agency(agency_row)

        assert issuer.country == "France"
        assert issuer.postal_code == "69002"
        assert issuer.bank is not None
        assert issuer.bank.iban == "FR7612345678901234567890123"
        assert issuer.bank.bic is None

    def test_issuer_without_bank(self, agency_row: dict) -> None:
        agency_row.update(iban=None)
        assert issuer_from_agency(agency_row).bank is None


class TestLoadPayload:
    """Tests du chargement d'un document {invoice, items, agency}."""

    def test_load_and_compose(
        self, invoice_row: dict, item_row: dict, agency_row: dict
    ) -> None:
        """Les enregistrements chargés se composent en un XML valide."""
        invoice, items, issuer = load_payload(
            {"invoice": invoice_row, "items": [item_row], "agency": agency_row}
        )
        xml = compose_invoice_xml(invoice, items, issuer)

        assert "<ram:TypeCode>381</ram:TypeCode>" in xml
        assert "<ram:TypeCode>20</ram:TypeCode>" in xml
        assert "SpecifiedTradePaymentTerms" not in xml
        assert validate_composed_xml(xml).valid

    def test_missing_sections(self, invoice_row: dict) -> None:
        with pytest.raises(PayloadError, match="Sections manquantes") as exc_info:
            load_payload({"invoice": invoice_row})
        assert exc_info.value.errors == ["items", "agency"]

    def test_null_items(self, invoice_row: dict, agency_row: dict) -> None:
        """Une section items nulle vaut une facture sans ligne."""
        _, items, _ = load_payload(
            {"invoice": invoice_row, "items": None, "agency": agency_row}
        )
        assert items == []

    def test_items_not_a_list(self, invoice_row: dict, agency_row: dict) -> None:
        with pytest.raises(PayloadError, match="items"):
            load_payload({"invoice": invoice_row, "items": "APS", "agency": agency_row})

    def test_invalid_invoice(self, item_row: dict, agency_row: dict) -> None:
        """Une facture sans numéro ni date est refusée avec le détail."""
        with pytest.raises(PayloadError, match="Données de facture invalides") as exc_info:
            load_payload({"invoice": {}, "items": [item_row], "agency": agency_row})
        assert any(error.startswith("number") for error in exc_info.value.errors)
        assert any(error.startswith("issue_date") for error in exc_info.value.errors)

    def test_unreadable_record(self, agency_row: dict) -> None:
        with pytest.raises(PayloadError, match="illisible"):
            load_payload({"invoice": None, "items": [], "agency": agency_row})
