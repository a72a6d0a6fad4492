"""Export du XML Factur-X vers un fichier ou un flux.

FR: Équivalent serveur du téléchargement proposé dans l'interface :
    le XML est écrit en UTF-8 sous un nom toujours terminé par « .xml ».
EN: Server-side counterpart of the UI download: the XML is written in
    UTF-8 under a name always ending with ".xml".
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TextIO

from facturx_agence.conf import get_setting

logger = logging.getLogger(__name__)

XML_EXTENSION = ".xml"
XML_MEDIA_TYPE = "application/xml"


def normalize_filename(filename: str | os.PathLike[str]) -> str:
    """Ajoute l'extension .xml si le nom ne la porte pas déjà."""
    name = os.fspath(filename)
    return name if name.endswith(XML_EXTENSION) else f"{name}{XML_EXTENSION}"


def default_export_filename(invoice_number: str) -> str:
    """Nom de fichier par défaut d'un export (« <numéro>_facturx.xml »)."""
    return f"{invoice_number}_facturx{XML_EXTENSION}"


def export_xml_as_file(
    xml: str,
    filename: str | os.PathLike[str],
    directory: str | os.PathLike[str] | None = None,
) -> Path:
    """Écrit le XML dans un fichier.

    Args:
        xml: Le document XML.
        filename: Nom (ou chemin) du fichier ; « .xml » est ajouté si absent.
        directory: Répertoire de destination (défaut : paramètre EXPORT_DIR,
            sinon le nom est utilisé tel quel). Créé s'il n'existe pas.

    Returns:
        Le chemin du fichier écrit.

    Raises:
        OSError: Si l'écriture échoue.
    """
    path = Path(normalize_filename(filename))
    base = directory or get_setting("EXPORT_DIR")
    if base:
        path = Path(base) / path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(xml, encoding="utf-8")
    logger.info("Export Factur-X écrit dans %s", path)
    return path


def export_xml_to_stream(xml: str, stream: TextIO) -> None:
    """Écrit le XML dans un flux texte déjà ouvert."""
    stream.write(xml)
    logger.info("Export Factur-X écrit dans %s", getattr(stream, "name", "un flux"))
