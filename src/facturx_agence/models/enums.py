"""Énumérations pour la facturation des agences.

FR: Codes et valeurs métier utilisés par le module de facturation de
    l'agence, et leur correspondance avec les codes EN16931 / UN/CEFACT.
EN: Business codes used by the agency invoicing module, and their
    mapping to EN16931 / UN/CEFACT codes.
"""

from enum import StrEnum


class Profile(StrEnum):
    """Profil Factur-X.

    FR: Niveau d'information du document ; seul l'identifiant de guide
        embarqué dans le XML en dépend.
    EN: Information level of the document; only the embedded guideline
        identifier depends on it.
    """

    MINIMUM = "MINIMUM"
    BASIC = "BASIC"
    EN16931 = "EN16931"
    EXTENDED = "EXTENDED"


class InvoiceType(StrEnum):
    """Type de facture de l'agence."""

    STANDARD = "standard"
    """Facture / Invoice"""

    CREDIT_NOTE = "credit_note"
    """Avoir / Credit note"""


class DocumentTypeCode(StrEnum):
    """Code du type de document (UNTDID 1001)."""

    INVOICE = "380"
    """Facture commerciale / Commercial invoice"""

    CREDIT_NOTE = "381"
    """Avoir / Credit note"""


class PaymentMethod(StrEnum):
    """Mode de règlement saisi sur la facture."""

    TRANSFER = "virement"
    """Virement / Credit transfer"""

    CHECK = "cheque"
    """Chèque / Cheque"""

    CARD = "carte"
    """Carte bancaire / Bank card"""

    DIRECT_DEBIT = "prelevement"
    """Prélèvement / Direct debit"""

    CASH = "especes"
    """Espèces / Cash"""


class PaymentMeansCode(StrEnum):
    """Code moyen de paiement (UNTDID 4461)."""

    CASH = "10"
    CHEQUE = "20"
    CREDIT_TRANSFER = "30"
    BANK_CARD = "48"
    SEPA_DIRECT_DEBIT = "59"


class UnitCode(StrEnum):
    """Code unité de mesure (UN/ECE Rec. 20)."""

    UNIT = "C62"
    """Unité / One (unit)"""

    HOUR = "HUR"
    """Heure / Hour"""

    DAY = "DAY"
    """Jour / Day"""
