"""Configuration du compositeur Factur-X.

FR: Paramètres FACTURX_AGENCE_* lus dans l'environnement par un modèle
    pydantic-settings, avec des valeurs par défaut pour chaque paramètre.
    Les valeurs invalides (profil, niveau de log) sont rejetées à la
    lecture par une ConfigurationError.
EN: FACTURX_AGENCE_* settings read from the environment through a
    pydantic-settings model, with a default for every setting. Invalid
    values (profile, log level) are rejected on read with a
    ConfigurationError.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from facturx_agence.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FACTURX_AGENCE_"


class Settings(BaseSettings):
    """Paramètres FACTURX_AGENCE_*.

    Une variable vide est ignorée et laisse la valeur par défaut.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True)

    default_profile: str = Field(
        default="EN16931",
        description="Profil Factur-X par défaut / Default Factur-X profile",
    )
    default_language: str = Field(
        default="fr",
        description="Langue du document / Document language",
    )
    default_currency: str = Field(
        default="EUR",
        description="Code devise ISO 4217 / Currency code",
    )
    export_dir: str | None = Field(
        default=None,
        description="Répertoire d'export / Export directory",
    )
    log_level: str = Field(
        default="WARNING",
        description="Niveau de log de la CLI / CLI log level",
    )

    @field_validator("default_profile")
    @classmethod
    def _check_profile(cls, value: str) -> str:
        from facturx_agence.models.enums import Profile

        return Profile(value.strip().upper())

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"niveau de log inconnu : {value}"
            raise ValueError(msg)
        return level


def load_settings() -> Settings:
    """Lit les paramètres dans l'environnement courant.

    Raises:
        ConfigurationError: Si une variable FACTURX_AGENCE_* est invalide.
    """
    try:
        return Settings()
    except ValidationError as exc:
        errors = [
            f"{ENV_PREFIX}{str(err['loc'][0]).upper()}: {err['msg']}"
            for err in exc.errors()
        ]
        msg = "Configuration FACTURX_AGENCE invalide"
        raise ConfigurationError(msg, errors) from exc


def get_setting(name: str) -> Any:
    """Retourne la valeur d'un paramètre FACTURX_AGENCE.

    FR: `name` est le nom de la variable sans préfixe (ex : "EXPORT_DIR").
    EN: `name` is the variable name without prefix (e.g. "EXPORT_DIR").

    Raises:
        KeyError: Si le paramètre n'existe pas.
        ConfigurationError: Si l'environnement contient une valeur invalide.
    """
    field = name.lower()
    if field not in Settings.model_fields:
        msg = f"Paramètre FACTURX_AGENCE inconnu : {name}"
        raise KeyError(msg)
    value = getattr(load_settings(), field)
    logger.debug("Paramètre %s = %r", name, value)
    return value
