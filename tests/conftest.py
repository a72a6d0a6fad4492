"""Fixtures partagées : agence, facture et lignes de test."""

from datetime import date
from decimal import Decimal

import pytest

from facturx_agence.models import (
    BankDetails,
    Buyer,
    Invoice,
    IssuerProfile,
    LineItem,
)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isole les tests des variables FACTURX_AGENCE_* de l'environnement."""
    for name in (
        "DEFAULT_PROFILE",
        "DEFAULT_LANGUAGE",
        "DEFAULT_CURRENCY",
        "EXPORT_DIR",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"FACTURX_AGENCE_{name}", raising=False)


@pytest.fixture
def issuer() -> IssuerProfile:
    """Agence émettrice complète."""
    return IssuerProfile(
        name="Atelier Dupont",
        legal_form="SARL d'architecture",
        siret="12345678900012",
        vat_number="FR12123456789",
        address="12 rue des Architectes",
        city="Lyon",
        postal_code="69002",
        country="France",
        email="contact@atelier-dupont.fr",
        phone="04 78 00 00 00",
        rcs_city="Lyon",
        capital_social=Decimal("10000"),
        bank=BankDetails(
            bank_name="Banque Populaire",
            iban="FR7612345678901234567890123",
            bic="CCBPFRPPLYO",
        ),
    )


@pytest.fixture
def minimal_issuer() -> IssuerProfile:
    """Agence sans email, sans TVA ni coordonnées bancaires."""
    return IssuerProfile(
        name="Atelier Dupont",
        siret="12345678900012",
        address="12 rue des Architectes",
        city="Lyon",
        postal_code="69002",
    )


@pytest.fixture
def line_item() -> LineItem:
    """Ligne d'honoraires unique à 20 %."""
    return LineItem(
        description="Honoraires mission",
        quantity=Decimal("1"),
        unit="unite",
        unit_price=Decimal("5000.00"),
        tva_rate=Decimal("20"),
        amount_ht=Decimal("5000.00"),
        amount_tva=Decimal("1000.00"),
    )


@pytest.fixture
def invoice() -> Invoice:
    """Facture standard d'une mission."""
    return Invoice(
        number="FA-2026-0042",
        invoice_type="standard",
        issue_date=date(2026, 9, 15),
        due_date=date(2026, 10, 15),
        payment_method="virement",
        payment_terms="30 jours fin de mois",
        notes="Phase APS",
        buyer=Buyer(
            name="Client SAS",
            address="5 avenue de la République",
            postal_code="75011",
            city="Paris",
            country="France",
            vat_number="FR98987654321",
            siret="98765432100034",
        ),
        subtotal_ht=Decimal("5000.00"),
        tva_amount=Decimal("1000.00"),
        total_ttc=Decimal("6000.00"),
        amount_due=Decimal("6000.00"),
    )
