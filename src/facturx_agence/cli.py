"""Points d'entrée CLI pour facturx-agence."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from facturx_agence.conf import load_settings
from facturx_agence.errors import ConfigurationError, PayloadError
from facturx_agence.export import default_export_filename, export_xml_as_file
from facturx_agence.generators.cii import compose_invoice_xml
from facturx_agence.models import ComposerOptions, load_payload
from facturx_agence.models.enums import Profile
from facturx_agence.validators import validate_composed_xml

EXIT_ERROR = 1
EXIT_INVALID = 2


def _configure_logging() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _fail(str(exc), exc.errors)
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str, details: list[str] | None = None) -> None:
    print(message, file=sys.stderr)
    for detail in details or []:
        print(f"  - {detail}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def _read_payload(path: Path) -> dict:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Lecture impossible de {path} : {exc}"
        raise PayloadError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"JSON invalide dans {path} : {exc}"
        raise PayloadError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"{path} doit contenir un objet JSON {{invoice, items, agency}}"
        raise PayloadError(msg)
    return payload


def _build_generate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facturx-agence-generate",
        description="Compose le XML Factur-X d'une facture à partir d'un fichier JSON.",
    )
    parser.add_argument(
        "payload",
        type=Path,
        help="Fichier JSON contenant les sections invoice, items et agency",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Nom du fichier XML (défaut : <numéro>_facturx.xml)",
    )
    parser.add_argument(
        "-d",
        "--directory",
        help="Répertoire de destination (défaut : FACTURX_AGENCE_EXPORT_DIR)",
    )
    parser.add_argument(
        "-p",
        "--profile",
        choices=[profile.value for profile in Profile],
        help="Profil Factur-X (défaut : FACTURX_AGENCE_DEFAULT_PROFILE)",
    )
    parser.add_argument("-l", "--language", help="Langue du document (ex : fr)")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Contrôle la structure du XML avant de l'écrire",
    )
    return parser


def generate(argv: list[str] | None = None) -> None:
    """Point d'entrée pour la commande `facturx-agence-generate`."""
    _configure_logging()
    args = _build_generate_parser().parse_args(argv)

    options: dict[str, str] = {}
    if args.profile:
        options["profile"] = args.profile
    if args.language:
        options["language"] = args.language

    try:
        invoice, items, issuer = load_payload(_read_payload(args.payload))
        xml = compose_invoice_xml(invoice, items, issuer, ComposerOptions(**options))
    except PayloadError as exc:
        _fail(str(exc), exc.errors)
    except ValidationError as exc:
        _fail(f"Options invalides : {exc}")

    if args.check:
        result = validate_composed_xml(xml)
        if not result.valid:
            for error in result.errors:
                print(error, file=sys.stderr)
            sys.exit(EXIT_INVALID)

    filename = args.output or default_export_filename(invoice.number)
    try:
        path = export_xml_as_file(xml, filename, directory=args.directory)
    except OSError as exc:
        _fail(f"Écriture impossible : {exc}")
    print(path)


def validate(argv: list[str] | None = None) -> None:
    """Point d'entrée pour la commande `facturx-agence-validate`."""
    _configure_logging()
    parser = argparse.ArgumentParser(
        prog="facturx-agence-validate",
        description="Contrôle la présence des éléments requis d'un XML Factur-X.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Fichiers XML à contrôler")
    args = parser.parse_args(argv)

    all_valid = True
    for path in args.files:
        try:
            xml = path.read_text(encoding="utf-8")
        except OSError as exc:
            _fail(f"Lecture impossible de {path} : {exc}")
        result = validate_composed_xml(xml)
        if result.valid:
            print(f"{path} : OK")
            continue
        all_valid = False
        print(f"{path} : {len(result.errors)} erreur(s)")
        for error in result.errors:
            print(f"  - {error}")

    if not all_valid:
        sys.exit(EXIT_INVALID)

