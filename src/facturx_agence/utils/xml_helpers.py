"""Utilitaires pour l'écriture XML textuelle.

FR: Le document CII est écrit ligne par ligne plutôt que via un arbre DOM,
    afin de maîtriser exactement la déclaration XML et l'échappement des
    cinq caractères spéciaux dans les textes libres.
EN: The CII document is written line by line rather than through a DOM
    tree, to control the XML declaration and the escaping of the five
    special characters in free text.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# L'esperluette doit rester en tête : les substitutions suivantes
# introduisent elles-mêmes des « & ».
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(value: object) -> str:
    """Échappe les caractères spéciaux XML d'une valeur textuelle.

    FR: Retourne une chaîne vide pour None ou une chaîne vide, afin que
        l'élément soit émis avec un contenu vide plutôt que « None ».
    EN: Returns an empty string for None/empty input.

    Args:
        value: La valeur à insérer dans le document.

    Returns:
        La valeur convertie en texte, avec &, <, >, " et ' remplacés
        par leurs entités.
    """
    if value is None or value == "":
        return ""
    text = str(value)
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def _format_attrs(attrs: Mapping[str, object] | None) -> str:
    if not attrs:
        return ""
    return "".join(f' {name}="{escape_xml(value)}"' for name, value in attrs.items())


class XMLWriter:
    """Écrivain XML indenté, sans état global.

    FR: Chaque appel ajoute une ligne au document ; les blocs ouverts via
        `block()` sont refermés automatiquement en sortie de contexte.
    EN: Each call appends a line; blocks opened with `block()` are closed
        when the context exits.
    """

    def __init__(self, indent: str = "  ") -> None:
        self._indent = indent
        self._depth = 0
        self._lines: list[str] = [XML_DECLARATION]

    def _write(self, line: str) -> None:
        self._lines.append(f"{self._indent * self._depth}{line}")

    @contextmanager
    def block(
        self, tag: str, attrs: Mapping[str, object] | None = None
    ) -> Iterator[XMLWriter]:
        """Ouvre un élément, puis le referme à la sortie du bloc `with`."""
        self._write(f"<{tag}{_format_attrs(attrs)}>")
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1
            self._write(f"</{tag}>")

    def element(
        self, tag: str, text: object, attrs: Mapping[str, object] | None = None
    ) -> None:
        """Écrit un élément feuille avec son texte échappé."""
        self._write(f"<{tag}{_format_attrs(attrs)}>{escape_xml(text)}</{tag}>")

    def optional_element(
        self, tag: str, text: object, attrs: Mapping[str, object] | None = None
    ) -> None:
        """Écrit l'élément seulement si `text` est renseigné."""
        if text:
            self.element(tag, text, attrs)

    def empty(self, tag: str) -> None:
        """Écrit un élément auto-fermant (`<tag/>`)."""
        self._write(f"<{tag}/>")

    def to_string(self) -> str:
        """Retourne le document complet, terminé par un saut de ligne."""
        return "\n".join(self._lines) + "\n"
