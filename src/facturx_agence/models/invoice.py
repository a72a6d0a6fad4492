"""Modèles de facture consommés par le compositeur.

FR: En-tête de facture, client et lignes, tels que fournis par le module
    de facturation de l'agence. Les montants sont calculés en amont et ne
    sont jamais recalculés ici.
EN: Invoice header, buyer and line items, as supplied by the agency
    invoicing module. Amounts are computed upstream and never recomputed.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from facturx_agence.conf import get_setting
from facturx_agence.models.enums import InvoiceType

DEFAULT_TVA_RATE = Decimal("20")


def _blank_as_none(value: object) -> object:
    """Une chaîne vide (champ de formulaire non rempli) vaut None."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _date_part(value: object) -> object:
    """Ne garde que la date d'un horodatage (« 2026-09-15T10:30:00Z »)."""
    value = _blank_as_none(value)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
        return value[:10]
    return value


class Buyer(BaseModel):
    """Client facturé.

    FR: Tous les champs sont facultatifs : le compositeur omet les blocs
        correspondants lorsqu'ils sont vides.
    EN: Every field is optional: the composer omits the matching blocks
        when they are empty.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = Field(default=None, description="Raison sociale / Name")
    address: str | None = Field(default=None, description="Rue / Street")
    postal_code: str | None = Field(default=None, description="Code postal / Postcode")
    city: str | None = Field(default=None, description="Ville / City")
    country: str | None = Field(
        default=None,
        description="Pays (« France » ou code ISO) / Country",
    )
    vat_number: str | None = Field(
        default=None,
        description="Numéro de TVA intracommunautaire / VAT number",
    )
    siret: str | None = Field(
        default=None,
        description="SIRET du client / National business ID",
    )


class LineItem(BaseModel):
    """Ligne de facture.

    FR: Poste facturé (honoraires, phase de mission, frais…). Le montant
        de TVA doit valoir amount_ht × tva_rate / 100 ; il est repris tel
        quel pour le récapitulatif par taux.
    EN: Billed entry. The tax amount must equal amount_ht × tva_rate / 100;
        it is used as-is for the per-rate breakdown.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    description: str | None = Field(default=None, description="Désignation / Name")
    detailed_description: str | None = Field(
        default=None,
        description="Description détaillée / Long description",
    )
    code: str | None = Field(default=None, description="Code article / Item code")
    unit: str | None = Field(
        default=None,
        description="Unité (heure, jour, unite…) / Unit of measure",
    )
    quantity: Decimal | None = Field(default=None, description="Quantité / Quantity")
    unit_price: Decimal | None = Field(
        default=None,
        description="Prix unitaire HT / Unit price excl. tax",
    )
    tva_rate: Decimal | None = Field(
        default=DEFAULT_TVA_RATE,
        description="Taux de TVA en % / VAT rate in %",
    )
    amount_ht: Decimal | None = Field(
        default=None,
        description="Montant HT de la ligne / Line amount excl. tax",
    )
    amount_tva: Decimal | None = Field(
        default=None,
        description="Montant de TVA de la ligne / Line tax amount",
    )

    @field_validator(
        "quantity", "unit_price", "tva_rate", "amount_ht", "amount_tva", mode="before"
    )
    @classmethod
    def _blank_amounts(cls, value: object) -> object:
        return _blank_as_none(value)


class Invoice(BaseModel):
    """En-tête de facture.

    FR: Document de facturation unique par agence. Les totaux sont ceux
        enregistrés sur la facture ; le compositeur les recopie.
    EN: Billing document, unique per issuer. Totals are the stored ones;
        the composer copies them.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    # --- Identification ---
    number: str = Field(..., description="Numéro de facture / Invoice number")
    invoice_type: str = Field(
        default=InvoiceType.STANDARD,
        description="Type (standard, credit_note) / Invoice type",
    )
    issue_date: date = Field(..., description="Date d'émission / Issue date")
    due_date: date | None = Field(
        default=None,
        description="Date d'échéance / Due date",
    )
    currency: str = Field(
        default_factory=lambda: get_setting("DEFAULT_CURRENCY"),
        description="Code devise ISO 4217 / Currency code",
    )

    # --- Paiement ---
    payment_method: str | None = Field(
        default=None,
        description="Mode de règlement / Payment method",
    )
    payment_terms: str | None = Field(
        default=None,
        description="Conditions de paiement / Payment terms",
    )

    # --- Client ---
    buyer: Buyer = Field(default_factory=Buyer, description="Client / Buyer")

    # --- Notes ---
    notes: str | None = Field(default=None, description="Note libre / Free text")

    # --- Totaux ---
    subtotal_ht: Decimal | None = Field(
        default=None,
        description="Total HT / Subtotal excl. tax",
    )
    tva_amount: Decimal | None = Field(
        default=None,
        description="Total TVA / Tax amount",
    )
    total_ttc: Decimal | None = Field(
        default=None,
        description="Total TTC / Total incl. tax",
    )
    amount_due: Decimal | None = Field(
        default=None,
        description="Reste à payer / Amount due",
    )

    @field_validator("issue_date", "due_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: object) -> object:
        return _date_part(value)

    @field_validator(
        "subtotal_ht", "tva_amount", "total_ttc", "amount_due", mode="before"
    )
    @classmethod
    def _blank_totals(cls, value: object) -> object:
        return _blank_as_none(value)

    @property
    def is_credit_note(self) -> bool:
        """Indique si le document est un avoir."""
        return self.invoice_type == InvoiceType.CREDIT_NOTE


class TaxSummary(BaseModel):
    """Récapitulatif TVA par taux.

    FR: Cumul des bases HT et des montants de TVA des lignes d'un même taux.
    EN: Accumulated basis and tax amounts of the lines sharing a rate.
    """

    rate: Decimal = Field(..., description="Taux de TVA en % / VAT rate in %")
    basis_amount: Decimal = Field(..., description="Base imposable HT / Basis amount")
    tax_amount: Decimal = Field(..., description="Montant de TVA / Tax amount")
