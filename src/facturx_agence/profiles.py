"""Profils Factur-X : identifiants de guide et libellés.

FR: Libellés affichés dans l'interface lors du choix du profil d'export.
EN: Labels shown in the UI when choosing the export profile.
"""

from facturx_agence.models.enums import Profile

GUIDELINE_PREFIX = "urn:factur-x.eu:1p0:"

UNKNOWN_PROFILE_LABEL = "Profil inconnu"

PROFILE_DESCRIPTIONS: dict[str, str] = {
    Profile.MINIMUM: "Profil Minimum - Informations essentielles uniquement",
    Profile.BASIC: "Profil Basic - Informations de base pour la comptabilité",
    Profile.EN16931: "Profil EN 16931 - Conforme à la norme européenne (recommandé)",
    Profile.EXTENDED: "Profil Extended - Toutes les informations détaillées",
}


def guideline_id(profile: str) -> str:
    """Retourne l'identifiant de guide embarqué pour un profil."""
    return f"{GUIDELINE_PREFIX}{profile.lower()}"


def describe_profile(profile_code: str) -> str:
    """Retourne le libellé français d'un profil Factur-X.

    Args:
        profile_code: Code du profil (MINIMUM, BASIC, EN16931, EXTENDED).

    Returns:
        Le libellé, ou « Profil inconnu » pour un code non reconnu.
    """
    if not isinstance(profile_code, str):
        return UNKNOWN_PROFILE_LABEL
    return PROFILE_DESCRIPTIONS.get(profile_code, UNKNOWN_PROFILE_LABEL)
