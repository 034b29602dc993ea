"""Benennungsvorlagen für Abgabedateien: Expandieren und Prüfen.

Eine Vorlage besteht aus freiem Text und den Platzhaltern ``{StudentId}``,
``{ClassName}`` und ``{FullName}``. Beim Expandieren wird zwischen
Platzhaltern (bzw. Platzhalter und angrenzendem Text) ein Trennzeichen
eingefügt, doppelte Trennzeichen zusammengefasst und Trennzeichen am Rand
entfernt.

Beispiel::

    >>> p = Profile(student_id="20230001", class_name="CS23-1", full_name="Zhang San")
    >>> expand("{StudentId}{ClassName}", p)
    '20230001-CS23-1'
"""

import re
from typing import NamedTuple

from pydantic import BaseModel, field_validator

from models.profile import Profile

DEFAULT_SEPARATOR = "-"

# Platzhalter → Profil-Feld
PLACEHOLDERS: dict[str, str] = {
    "StudentId": "student_id",
    "ClassName": "class_name",
    "FullName": "full_name",
}

_PLACEHOLDER_RE = re.compile(r"\{(" + "|".join(PLACEHOLDERS) + r")\}")
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


class TemplateError(ValueError):
    """Vorlage ohne erkannten Platzhalter (Autoren-Grenze)."""


class Token(NamedTuple):
    text: str
    placeholder: bool


class NameCheck(BaseModel):
    """Ergebnis der Dateinamen-Prüfung."""

    matched: bool
    # Immer gesetzt: erwarteter Name + Endung der eingereichten Datei
    expected: str

    @property
    def message(self) -> str:
        if self.matched:
            return "Dateiname entspricht dem Format."
        return f"Achtung: Dateiname entspricht nicht dem Format. Vorschlag: {self.expected}"


# ─── Tokenizer ───

def tokenize(template: str) -> list[Token]:
    """Zerlegt eine Vorlage in Platzhalter- und Text-Tokens.

    Unbekannte ``{...}``-Ausdrücke bleiben Text.
    """
    tokens: list[Token] = []
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(template):
        if m.start() > pos:
            tokens.append(Token(template[pos:m.start()], False))
        tokens.append(Token(m.group(1), True))
        pos = m.end()
    if pos < len(template):
        tokens.append(Token(template[pos:], False))
    return tokens


def placeholders_in(template: str) -> list[str]:
    """Alle erkannten Platzhalter in Reihenfolge (mit Wiederholungen)."""
    return _PLACEHOLDER_RE.findall(template)


def has_placeholder(template: str) -> bool:
    return _PLACEHOLDER_RE.search(template) is not None


def require_placeholder(template: str) -> str:
    """Wirft TemplateError, wenn die Vorlage keinen Platzhalter enthält."""
    if not has_placeholder(template):
        raise TemplateError(
            f"Vorlage '{template}' enthält keinen Platzhalter "
            f"({', '.join('{' + p + '}' for p in PLACEHOLDERS)})"
        )
    return template


def split_extension(filename: str) -> tuple[str, str]:
    """Trennt die Endung ab: ``"a.b.pdf"`` → ``("a.b", ".pdf")``.

    Ohne Endung ist der zweite Teil leer.
    """
    m = _EXTENSION_RE.search(filename)
    if m is None:
        return filename, ""
    return filename[:m.start()], m.group(0)


# ─── Expansion ───

def _needs_separator(ch: str, separator: str) -> bool:
    return not ch.isspace() and ch not in separator


def expand(template: str, profile: Profile, separator: str = DEFAULT_SEPARATOR) -> str:
    """Expandiert ``template`` gegen ``profile`` zum erwarteten Dateinamen."""
    parts: list[str] = []
    prev: Token | None = None
    for tok in tokenize(template):
        if tok.placeholder:
            if prev is not None:
                if prev.placeholder or _needs_separator(prev.text[-1], separator):
                    parts.append(separator)
            parts.append(getattr(profile, PLACEHOLDERS[tok.text]))
        else:
            if prev is not None and prev.placeholder and _needs_separator(tok.text[0], separator):
                parts.append(separator)
            parts.append(tok.text)
        prev = tok
    return _normalize_separators("".join(parts), separator)


def _normalize_separators(name: str, separator: str) -> str:
    if not separator:
        return name
    sep = re.escape(separator)
    name = re.sub(f"(?:{sep}){{2,}}", separator, name)
    while name.startswith(separator):
        name = name[len(separator):]
    while name.endswith(separator):
        name = name[:-len(separator)]
    return name


# ─── Prüfung ───

def validate(
    template: str,
    profile: Profile,
    candidate_filename: str,
    separator: str = DEFAULT_SEPARATOR,
) -> NameCheck:
    """Vergleicht einen eingereichten Dateinamen mit der Vorlage.

    Endungen werden vor dem Vergleich auf beiden Seiten entfernt; der
    Vergleich ist exakt (Groß-/Kleinschreibung zählt). ``expected`` trägt
    immer die Endung der eingereichten Datei, auch bei Übereinstimmung.
    """
    # Eine Endung in der Vorlage selbst ("{StudentId}.pdf") ist kein Namensteil
    template_stem, template_ext = split_extension(template)
    if template_ext and not has_placeholder(template_ext):
        template = template_stem
    # Punkte in Profilwerten ("Inf.23") gehören zum Namen, nicht zur Endung
    expected_stem = expand(template, profile, separator)
    candidate_stem, extension = split_extension(candidate_filename)
    return NameCheck(
        matched=candidate_stem == expected_stem,
        expected=expected_stem + extension,
    )


class NamingRule(BaseModel):
    """Benennungsregel an der Autoren-Grenze: mindestens ein Platzhalter."""

    template: str

    @field_validator("template")
    @classmethod
    def _require_placeholder(cls, v: str) -> str:
        return require_placeholder(v)

    def check(self, profile: Profile, candidate_filename: str,
              separator: str = DEFAULT_SEPARATOR) -> NameCheck:
        return validate(self.template, profile, candidate_filename, separator)
