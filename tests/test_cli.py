"""Tests des commandes facturx-agence-generate et facturx-agence-validate."""

import json

import pytest

from facturx_agence.cli import EXIT_ERROR, EXIT_INVALID, generate, validate


@pytest.fixture
def payload_file(tmp_path):
    """Document JSON {invoice, items, agency} sur disque."""
    payload = {
        "invoice": {
            "invoice_number": "FA-2026-0042",
            "invoice_type": "standard",
            "invoice_date": "2026-09-15",
            "due_date": "2026-10-15",
            "client_name": "Client SAS",
            "subtotal_ht": 5000,
            "tva_amount": 1000,
            "total_ttc": 6000,
            "amount_due": 6000,
        },
        "items": [
            {
                "description": "Honoraires mission",
                "quantity": 1,
                "unit_price": 5000,
                "tva_rate": 20,
                "amount_ht": 5000,
                "amount_tva": 1000,
            }
        ],
        "agency": {
            "name": "Atelier Dupont",
            "siret": "12345678900012",
            "address": "12 rue des Architectes",
            "city": "Lyon",
            "postal_code": "69002",
        },
    }
    path = tmp_path / "facture.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestGenerate:
    """Tests de la commande de génération."""

    def test_generate_default_name(self, payload_file, tmp_path, capsys) -> None:
        out_dir = tmp_path / "out"
        generate([str(payload_file), "-d", str(out_dir), "--check"])

        written = out_dir / "FA-2026-0042_facturx.xml"
        assert written.exists()
        assert "<ram:ID>FA-2026-0042</ram:ID>" in written.read_text(encoding="utf-8")
        assert str(written) in capsys.readouterr().out

    def test_generate_with_options(self, payload_file, tmp_path) -> None:
        generate(
            [
                str(payload_file),
                "-d",
                str(tmp_path),
                "-o",
                "export",
                "-p",
                "BASIC",
                "-l",
                "en",
            ]
        )
        xml = (tmp_path / "export.xml").read_text(encoding="utf-8")
        assert "urn:factur-x.eu:1p0:basic" in xml
        assert "<ram:LanguageID>en</ram:LanguageID>" in xml

    def test_invalid_json(self, tmp_path, capsys) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{pas du json", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            generate([str(bad)])
        assert exc_info.value.code == EXIT_ERROR
        assert "JSON invalide" in capsys.readouterr().err

    def test_missing_sections(self, tmp_path, capsys) -> None:
        partial = tmp_path / "partial.json"
        partial.write_text(json.dumps({"invoice": {}}), encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            generate([str(partial)])
        assert exc_info.value.code == EXIT_ERROR
        assert "Sections manquantes" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            generate([str(tmp_path / "absent.json")])
        assert exc_info.value.code == EXIT_ERROR
        assert "Lecture impossible" in capsys.readouterr().err

    @pytest.mark.parametrize(
        ("variable", "value"),
        [
            ("FACTURX_AGENCE_LOG_LEVEL", "BAVARD"),
            ("FACTURX_AGENCE_DEFAULT_PROFILE", "BASICWL"),
        ],
    )
    def test_invalid_configuration(
        self, payload_file, tmp_path, capsys, monkeypatch, variable: str, value: str
    ) -> None:
        monkeypatch.setenv(variable, value)

        with pytest.raises(SystemExit) as exc_info:
            generate([str(payload_file), "-d", str(tmp_path)])
        assert exc_info.value.code == EXIT_ERROR
        err = capsys.readouterr().err
        assert "Configuration FACTURX_AGENCE invalide" in err
        assert variable in err
        assert not (tmp_path / "FA-2026-0042_facturx.xml").exists()


class TestValidate:
    """Tests de la commande de contrôle."""

    def test_valid_file(self, payload_file, tmp_path, capsys) -> None:
        generate([str(payload_file), "-d", str(tmp_path)])
        capsys.readouterr()

        validate([str(tmp_path / "FA-2026-0042_facturx.xml")])
        assert ": OK" in capsys.readouterr().out

    def test_invalid_file(self, tmp_path, capsys) -> None:
        xml_file = tmp_path / "vide.xml"
        xml_file.write_text("<racine/>", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            validate([str(xml_file)])
        assert exc_info.value.code == EXIT_INVALID
        out = capsys.readouterr().out
        assert "8 erreur(s)" in out
        assert "Élément requis manquant: ram:GrandTotalAmount" in out
