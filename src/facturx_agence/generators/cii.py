"""Composition du XML CII (Factur-X / ZUGFeRD).

FR: Produit le document XML UN/CEFACT Cross Industry Invoice à partir de
    l'en-tête de facture, des lignes et du profil de l'agence émettrice.
    La composition est une fonction pure : mêmes entrées, même document,
    sans horodatage ni identifiant aléatoire.
EN: Produces the UN/CEFACT Cross Industry Invoice XML document from the
    invoice header, line items and issuing agency profile. Composition is
    a pure function: same inputs, same document.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, TypeVar

from pydantic import BaseModel

from facturx_agence.models.enums import (
    DocumentTypeCode,
    PaymentMeansCode,
    PaymentMethod,
    UnitCode,
)
from facturx_agence.models.invoice import (
    DEFAULT_TVA_RATE,
    Buyer,
    Invoice,
    LineItem,
    TaxSummary,
)
from facturx_agence.models.issuer import IssuerProfile
from facturx_agence.models.options import ComposerOptions
from facturx_agence.profiles import guideline_id
from facturx_agence.utils.xml_helpers import XMLWriter

logger = logging.getLogger(__name__)

# --- Namespaces CII D16B ---
RSM = "urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100"
QDT = "urn:un:unece:uncefact:data:standard:QualifiedDataType:100"
RAM = "urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100"
UDT = "urn:un:unece:uncefact:data:standard:UnqualifiedDataType:100"
XSI = "http://www.w3.org/2001/XMLSchema-instance"

NSMAP = {
    "rsm": RSM,
    "qdt": QDT,
    "ram": RAM,
    "udt": UDT,
    "xsi": XSI,
}

DATE_FORMAT_CODE = "102"
FRANCE = "France"
FRANCE_CODE = "FR"

_PAYMENT_MEANS_CODES: dict[str, PaymentMeansCode] = {
    PaymentMethod.TRANSFER: PaymentMeansCode.CREDIT_TRANSFER,
    "transfer": PaymentMeansCode.CREDIT_TRANSFER,
    PaymentMethod.CHECK: PaymentMeansCode.CHEQUE,
    "check": PaymentMeansCode.CHEQUE,
    PaymentMethod.CARD: PaymentMeansCode.BANK_CARD,
    "card": PaymentMeansCode.BANK_CARD,
    PaymentMethod.DIRECT_DEBIT: PaymentMeansCode.SEPA_DIRECT_DEBIT,
    "direct_debit": PaymentMeansCode.SEPA_DIRECT_DEBIT,
    "direct-debit": PaymentMeansCode.SEPA_DIRECT_DEBIT,
    PaymentMethod.CASH: PaymentMeansCode.CASH,
    "cash": PaymentMeansCode.CASH,
}

_UNIT_CODES: dict[str, UnitCode] = {
    "heure": UnitCode.HOUR,
    "jour": UnitCode.DAY,
}

_CENT = Decimal("0.01")

_ModelT = TypeVar("_ModelT", bound=BaseModel)


# --- Formatage des valeurs ---


def _fmt_amount(amount: Decimal | None) -> str:
    """Formate un montant avec 2 décimales (None → 0.00)."""
    value = amount if amount else Decimal("0")
    return str(value.quantize(_CENT, rounding=ROUND_HALF_UP))


def _fmt_number(value: Decimal) -> str:
    """Formate un nombre sans zéros superflus (20, 5.5, 1.25)."""
    return format(value.normalize(), "f")


def _fmt_date(d: object) -> str:
    """Formate une date au format CII 102 (YYYYMMDD)."""
    return d.strftime("%Y%m%d")  # type: ignore[attr-defined]


# --- Règles de correspondance ---


def document_type_code(invoice: Invoice) -> DocumentTypeCode:
    """380 pour une facture, 381 pour un avoir."""
    if invoice.is_credit_note:
        return DocumentTypeCode.CREDIT_NOTE
    return DocumentTypeCode.INVOICE


def payment_means_code(payment_method: str | None) -> PaymentMeansCode:
    """Code UNTDID 4461 du mode de règlement (virement par défaut)."""
    if not payment_method:
        return PaymentMeansCode.CREDIT_TRANSFER
    return _PAYMENT_MEANS_CODES.get(
        payment_method.strip().lower(), PaymentMeansCode.CREDIT_TRANSFER
    )


def unit_code(unit: str | None) -> UnitCode:
    """Code UN/ECE Rec. 20 de l'unité (C62 par défaut)."""
    return _UNIT_CODES.get(unit or "", UnitCode.UNIT)


def country_code(country: str | None, *, default_to_france: bool = False) -> str:
    """Convertit le pays saisi en code pays.

    FR: « France » devient FR ; les autres valeurs sont reprises telles
        quelles (elles sont échappées à l'écriture). Pour le client, un
        pays absent vaut FR.
    EN: "France" becomes FR; other values pass through. For the buyer,
        a missing country defaults to FR.
    """
    if country == FRANCE or (default_to_france and not country):
        return FRANCE_CODE
    return country or ""


def _line_tax_rate(item: LineItem) -> Decimal:
    return item.tva_rate if item.tva_rate is not None else DEFAULT_TVA_RATE


def _line_quantity(item: LineItem) -> Decimal:
    return item.quantity if item.quantity else Decimal("1")


def tax_breakdown(line_items: Iterable[LineItem]) -> list[TaxSummary]:
    """Regroupe les lignes par taux de TVA.

    FR: Chaque taux distinct donne un récapitulatif cumulant les bases HT
        et les montants de TVA des lignes, dans l'ordre de première
        apparition du taux.
    EN: Each distinct rate yields one summary accumulating the lines'
        basis and tax amounts, in first-seen order.
    """
    buckets: dict[Decimal, tuple[Decimal, Decimal]] = {}
    for item in line_items:
        rate = _line_tax_rate(item)
        basis, tax = buckets.get(rate, (Decimal("0"), Decimal("0")))
        buckets[rate] = (
            basis + (item.amount_ht or Decimal("0")),
            tax + (item.amount_tva or Decimal("0")),
        )
    return [
        TaxSummary(rate=rate, basis_amount=basis, tax_amount=tax)
        for rate, (basis, tax) in buckets.items()
    ]


def _coerce(model_cls: type[_ModelT], value: _ModelT | Mapping[str, Any]) -> _ModelT:
    if isinstance(value, model_cls):
        return value
    return model_cls.model_validate(value)


# --- Point d'entrée ---


def compose_invoice_xml(
    invoice: Invoice | Mapping[str, Any],
    line_items: Iterable[LineItem | Mapping[str, Any]],
    issuer: IssuerProfile | Mapping[str, Any],
    options: ComposerOptions | Mapping[str, Any] | None = None,
) -> str:
    """Compose le document XML Factur-X d'une facture.

    FR: Les blocs facultatifs (TVA client, email, conditions de paiement,
        coordonnées bancaires…) ne sont émis que si le champ correspondant
        est renseigné. Aucune exception n'est levée pour une donnée
        facultative manquante : la validation est faite séparément.
    EN: Optional blocks are emitted only when their field is set. No
        exception is raised for missing optional data.

    Args:
        invoice: En-tête de facture (modèle ou dictionnaire).
        line_items: Lignes de facture, dans l'ordre d'affichage.
        issuer: Profil de l'agence émettrice.
        options: Profil Factur-X et langue du document.

    Returns:
        Le document XML (déclaration UTF-8 incluse).
    """
    invoice = _coerce(Invoice, invoice)
    items = [_coerce(LineItem, item) for item in line_items]
    issuer = _coerce(IssuerProfile, issuer)
    if options is None:
        options = ComposerOptions()
    else:
        options = _coerce(ComposerOptions, options)

    summaries = tax_breakdown(items)
    logger.debug(
        "Composition Factur-X %s : facture %s, %d ligne(s), %d taux de TVA",
        options.profile,
        invoice.number,
        len(items),
        len(summaries),
    )

    writer = XMLWriter()
    root_attrs = {f"xmlns:{prefix}": uri for prefix, uri in NSMAP.items()}
    with writer.block("rsm:CrossIndustryInvoice", root_attrs):
        _build_context(writer, options)
        _build_document(writer, invoice, options)
        with writer.block("rsm:SupplyChainTradeTransaction"):
            _build_trade_agreement(writer, invoice, issuer)
            writer.empty("ram:ApplicableHeaderTradeDelivery")
            _build_trade_settlement(writer, invoice, issuer, summaries)
            for idx, item in enumerate(items, start=1):
                _build_line_item(writer, item, idx)
    return writer.to_string()


# --- Construction du document ---


def _build_context(writer: XMLWriter, options: ComposerOptions) -> None:
    """Construit ExchangedDocumentContext avec le profil Factur-X."""
    with writer.block("rsm:ExchangedDocumentContext"):
        with writer.block("ram:GuidelineSpecifiedDocumentContextParameter"):
            writer.element("ram:ID", guideline_id(options.profile))


def _build_document(
    writer: XMLWriter, invoice: Invoice, options: ComposerOptions
) -> None:
    """Construit ExchangedDocument (ID, TypeCode, date, langue, note)."""
    with writer.block("rsm:ExchangedDocument"):
        writer.element("ram:ID", invoice.number)
        writer.element("ram:TypeCode", document_type_code(invoice))
        with writer.block("ram:IssueDateTime"):
            writer.element(
                "udt:DateTimeString",
                _fmt_date(invoice.issue_date),
                {"format": DATE_FORMAT_CODE},
            )
        writer.element("ram:LanguageID", options.language)
        if invoice.notes:
            with writer.block("ram:IncludedNote"):
                writer.element("ram:Content", invoice.notes)


# --- Header : Agreement (vendeur, acheteur) ---


def _build_trade_agreement(
    writer: XMLWriter, invoice: Invoice, issuer: IssuerProfile
) -> None:
    """Construit ApplicableHeaderTradeAgreement."""
    with writer.block("ram:ApplicableHeaderTradeAgreement"):
        _build_seller(writer, issuer)
        _build_buyer(writer, invoice.buyer)


def _build_seller(writer: XMLWriter, issuer: IssuerProfile) -> None:
    """Construit SellerTradeParty depuis le profil de l'agence."""
    with writer.block("ram:SellerTradeParty"):
        writer.element("ram:Name", issuer.name)
        writer.optional_element("ram:Description", issuer.legal_form)

        with writer.block("ram:SpecifiedLegalOrganization"):
            writer.element("ram:ID", issuer.siret, {"schemeID": "0002"})
            if issuer.rcs_city:
                writer.element("ram:TradingBusinessName", f"RCS {issuer.rcs_city}")

        with writer.block("ram:PostalTradeAddress"):
            writer.element("ram:PostcodeCode", issuer.postal_code)
            writer.element("ram:LineOne", issuer.address)
            writer.element("ram:CityName", issuer.city)
            writer.element("ram:CountryID", country_code(issuer.country))

        if issuer.email:
            with writer.block("ram:URIUniversalCommunication"):
                writer.element("ram:URIID", issuer.email, {"schemeID": "EM"})

        if issuer.vat_number:
            with writer.block("ram:SpecifiedTaxRegistration"):
                writer.element("ram:ID", issuer.vat_number, {"schemeID": "VA"})


def _build_buyer(writer: XMLWriter, buyer: Buyer) -> None:
    """Construit BuyerTradeParty (champs d'adresse facultatifs)."""
    with writer.block("ram:BuyerTradeParty"):
        writer.element("ram:Name", buyer.name)

        if buyer.siret:
            with writer.block("ram:SpecifiedLegalOrganization"):
                writer.element("ram:ID", buyer.siret, {"schemeID": "0002"})

        with writer.block("ram:PostalTradeAddress"):
            writer.optional_element("ram:PostcodeCode", buyer.postal_code)
            writer.optional_element("ram:LineOne", buyer.address)
            writer.optional_element("ram:CityName", buyer.city)
            writer.element(
                "ram:CountryID", country_code(buyer.country, default_to_france=True)
            )

        if buyer.vat_number:
            with writer.block("ram:SpecifiedTaxRegistration"):
                writer.element("ram:ID", buyer.vat_number, {"schemeID": "VA"})


# --- Header : Settlement (paiement, taxes, totaux) ---


def _build_trade_settlement(
    writer: XMLWriter,
    invoice: Invoice,
    issuer: IssuerProfile,
    summaries: list[TaxSummary],
) -> None:
    """Construit ApplicableHeaderTradeSettlement."""
    with writer.block("ram:ApplicableHeaderTradeSettlement"):
        writer.element("ram:InvoiceCurrencyCode", invoice.currency)
        _build_payment_means(writer, invoice, issuer)

        # ApplicableTradeTax (un bloc par taux de TVA)
        for summary in summaries:
            _build_tax_summary(writer, summary)

        if invoice.due_date:
            _build_payment_terms(writer, invoice)

        _build_monetary_summation(writer, invoice)


def _build_payment_means(
    writer: XMLWriter, invoice: Invoice, issuer: IssuerProfile
) -> None:
    """Construit SpecifiedTradeSettlementPaymentMeans."""
    bank = issuer.bank
    with writer.block("ram:SpecifiedTradeSettlementPaymentMeans"):
        writer.element("ram:TypeCode", payment_means_code(invoice.payment_method))

        if bank and bank.iban:
            with writer.block("ram:PayeePartyCreditorFinancialAccount"):
                writer.element("ram:IBANID", bank.iban)

        if bank and bank.bic:
            with writer.block("ram:PayeeSpecifiedCreditorFinancialInstitution"):
                writer.element("ram:BICID", bank.bic)
                writer.optional_element("ram:Name", bank.bank_name)


def _build_tax_summary(writer: XMLWriter, summary: TaxSummary) -> None:
    """Construit un bloc ApplicableTradeTax du settlement."""
    with writer.block("ram:ApplicableTradeTax"):
        writer.element("ram:CalculatedAmount", _fmt_amount(summary.tax_amount))
        writer.element("ram:TypeCode", "VAT")
        writer.element("ram:BasisAmount", _fmt_amount(summary.basis_amount))
        writer.element("ram:CategoryCode", "S")
        writer.element("ram:RateApplicablePercent", _fmt_number(summary.rate))


def _build_payment_terms(writer: XMLWriter, invoice: Invoice) -> None:
    """Construit SpecifiedTradePaymentTerms (description + échéance)."""
    with writer.block("ram:SpecifiedTradePaymentTerms"):
        writer.optional_element("ram:Description", invoice.payment_terms)
        with writer.block("ram:DueDateDateTime"):
            writer.element(
                "udt:DateTimeString",
                _fmt_date(invoice.due_date),
                {"format": DATE_FORMAT_CODE},
            )


def _build_monetary_summation(writer: XMLWriter, invoice: Invoice) -> None:
    """Construit SpecifiedTradeSettlementHeaderMonetarySummation.

    Les totaux sont ceux de la facture, sans recalcul.
    """
    with writer.block("ram:SpecifiedTradeSettlementHeaderMonetarySummation"):
        writer.element("ram:LineTotalAmount", _fmt_amount(invoice.subtotal_ht))
        writer.element("ram:TaxBasisTotalAmount", _fmt_amount(invoice.subtotal_ht))
        writer.element(
            "ram:TaxTotalAmount",
            _fmt_amount(invoice.tva_amount),
            {"currencyID": invoice.currency},
        )
        writer.element("ram:GrandTotalAmount", _fmt_amount(invoice.total_ttc))
        writer.element("ram:DuePayableAmount", _fmt_amount(invoice.amount_due))


# --- Lignes de facture ---


def _build_line_item(writer: XMLWriter, item: LineItem, idx: int) -> None:
    """Construit IncludedSupplyChainTradeLineItem."""
    with writer.block("ram:IncludedSupplyChainTradeLineItem"):
        with writer.block("ram:AssociatedDocumentLineDocument"):
            writer.element("ram:LineID", idx)

        with writer.block("ram:SpecifiedTradeProduct"):
            writer.optional_element("ram:SellerAssignedID", item.code)
            writer.element("ram:Name", item.description)
            writer.optional_element("ram:Description", item.detailed_description)

        with writer.block("ram:SpecifiedLineTradeAgreement"):
            with writer.block("ram:NetPriceProductTradePrice"):
                writer.element("ram:ChargeAmount", _fmt_amount(item.unit_price))

        with writer.block("ram:SpecifiedLineTradeDelivery"):
            writer.element(
                "ram:BilledQuantity",
                _fmt_number(_line_quantity(item)),
                {"unitCode": unit_code(item.unit)},
            )

        with writer.block("ram:SpecifiedLineTradeSettlement"):
            with writer.block("ram:ApplicableTradeTax"):
                writer.element("ram:TypeCode", "VAT")
                writer.element("ram:CategoryCode", "S")
                writer.element(
                    "ram:RateApplicablePercent", _fmt_number(_line_tax_rate(item))
                )
            with writer.block("ram:SpecifiedTradeSettlementLineMonetarySummation"):
                writer.element("ram:LineTotalAmount", _fmt_amount(item.amount_ht))
