"""Hiérarchie d'exceptions de facturx-agence.

FR: La composition et la validation structurelle ne lèvent jamais
    d'exception ; ces classes couvrent les frontières du paquet
    (configuration, chargement de données, intégration PDF).
EN: Composition and structural validation never raise; these classes
    cover the package boundaries (configuration, payload loading, PDF
    embedding).
"""


class FacturXAgenceError(Exception):
    """Erreur de base pour toutes les opérations facturx-agence."""


class PayloadError(FacturXAgenceError):
    """Données d'entrée illisibles ou incomplètes.

    FR: Levée quand un enregistrement de facture, de ligne ou d'agence
        ne peut pas être converti en modèle.
    EN: Raised when an invoice, line or agency record cannot be
        converted into a model.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = errors or []


class PDFEmbeddingError(FacturXAgenceError):
    """Échec de l'intégration du XML dans le PDF/A-3."""


class ConfigurationError(FacturXAgenceError):
    """Variable FACTURX_AGENCE_* invalide dans l'environnement."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = errors or []
