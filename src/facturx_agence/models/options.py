"""Options de composition du document Factur-X."""

from pydantic import BaseModel, Field, field_validator

from facturx_agence.conf import get_setting
from facturx_agence.models.enums import Profile


class ComposerOptions(BaseModel):
    """Options reconnues par le compositeur.

    FR: Le profil ne change que l'identifiant de guide embarqué ; le
        respect des règles d'information du profil reste à la charge de
        l'appelant.
    EN: The profile only changes the embedded guideline identifier.
    """

    profile: Profile = Field(
        default_factory=lambda: Profile(get_setting("DEFAULT_PROFILE")),
        description="Profil Factur-X / Factur-X profile",
    )
    language: str = Field(
        default_factory=lambda: get_setting("DEFAULT_LANGUAGE"),
        description="Code langue ISO 639-1 / Document language",
    )

    @field_validator("profile", mode="before")
    @classmethod
    def _normalize_profile(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value
