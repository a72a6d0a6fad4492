"""Identité légale et fiscale de l'agence émettrice."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class BankDetails(BaseModel):
    """Coordonnées bancaires de l'agence.

    FR: IBAN, BIC et nom de la banque pour les règlements par virement.
    EN: IBAN, BIC and bank name for credit transfers.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    bank_name: str | None = Field(default=None, description="Banque / Bank name")
    iban: str | None = Field(default=None, description="IBAN / Account identifier")
    bic: str | None = Field(default=None, description="BIC / Bank routing code")


class IssuerProfile(BaseModel):
    """Agence émettrice de la facture (vendeur).

    FR: Raison sociale, SIRET et adresse sont requis ; les autres
        informations ne sont émises dans le XML que si elles sont
        renseignées.
    EN: Legal name, SIRET and address are required; other fields are
        emitted only when set.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(..., description="Raison sociale / Legal name")
    legal_form: str | None = Field(
        default=None,
        description="Forme juridique (SARL, SAS…) / Legal form",
    )
    siret: str = Field(..., description="SIRET / National business ID")
    vat_number: str | None = Field(
        default=None,
        description="Numéro de TVA intracommunautaire / VAT number",
    )
    address: str = Field(default="", description="Rue / Street")
    city: str = Field(default="", description="Ville / City")
    postal_code: str = Field(default="", description="Code postal / Postcode")
    country: str = Field(default="France", description="Pays / Country")
    email: str | None = Field(default=None, description="Email de contact")
    phone: str | None = Field(default=None, description="Téléphone de contact")
    rcs_city: str | None = Field(
        default=None,
        description="Ville du RCS / Commercial registry city",
    )
    capital_social: Decimal | None = Field(
        default=None,
        description="Capital social / Share capital",
    )
    bank: BankDetails | None = Field(
        default=None,
        description="Coordonnées bancaires / Bank details",
    )
