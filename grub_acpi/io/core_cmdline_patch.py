"""Injection des jetons `acpi_osi` dans GRUB_CMDLINE_LINUX_DEFAULT.

Transformation pure: une séquence de lignes en entrée, une séquence de lignes
en sortie. Aucune I/O ici (lecture, sauvegarde et écriture sont faites par
l'appelant).

Seule la *première* ligne non commentée qui affecte la clé est modifiée.
Si la clé est absente, un commentaire et une affectation par défaut sont
ajoutés en fin de fichier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from loguru import logger

CMDLINE_KEY: Final[str] = "GRUB_CMDLINE_LINUX_DEFAULT"

ACPI_OSI_BANG: Final[str] = "acpi_osi=!"
# Guillemets échappés pour survivre dans la valeur entre guillemets du fichier.
ACPI_OSI_WINDOWS_2009: Final[str] = 'acpi_osi=\\"Windows 2009\\"'

ADDED_BY_COMMENT: Final[str] = "# Added by grub-acpi-osi"
DEFAULT_TOKENS: Final[tuple[str, ...]] = ("quiet", "splash", ACPI_OSI_BANG, ACPI_OSI_WINDOWS_2009)

_COMMENT_RE: Final = re.compile(r"^\s*#")
_ASSIGNMENT_RE: Final = re.compile(rf"^(\s*{CMDLINE_KEY}\s*=\s*)(.*)$")
_QUOTE_CHARS: Final[tuple[str, str]] = ('"', "'")


@dataclass
class AssignmentValue:
    """Valeur (partie droite) de la ligne cible, découpée en jetons."""

    quote_char: str = '"'
    tokens: list[str] = field(default_factory=list)

    def render(self) -> str:
        """Reconstruit la valeur entre guillemets (style de guillemet conservé)."""
        return f"{self.quote_char}{' '.join(self.tokens)}{self.quote_char}"


@dataclass(frozen=True)
class CmdlinePatch:
    """Résultat de la transformation."""

    lines: list[str]
    found: bool
    changed: bool


def split_line_terminator(line: str) -> tuple[str, str]:
    """Sépare une ligne en (contenu, fin de ligne). La fin peut être vide."""
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\r"):
        return line[:-1], "\r"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""


def split_quoted_value(raw_value: str) -> tuple[str, str]:
    """Retourne (guillemet, contenu intérieur) d'une valeur brute.

    Une valeur mal ou non entourée de guillemets est réduite (strip) et
    prendra des guillemets doubles à la reconstruction.
    """
    if len(raw_value) >= 2 and raw_value[0] in _QUOTE_CHARS and raw_value[-1] == raw_value[0]:
        return raw_value[0], raw_value[1:-1]
    return '"', raw_value.strip()


def unescape_quotes(inner: str) -> str:
    """Remplace `\\"` et `\\'` par le guillemet nu (sert uniquement aux tests d'appartenance)."""
    return inner.replace('\\"', '"').replace("\\'", "'")


def missing_tokens(inner: str) -> list[str]:
    """Liste les jetons requis absents, dans l'ordre d'ajout.

    Le second jeton est considéré présent dès que `acpi_osi` et
    `Windows 2009` apparaissent quelque part dans la valeur, même sans lien
    entre eux. Cette vérification lâche est conservée telle quelle.
    """
    unescaped = unescape_quotes(inner)
    missing: list[str] = []
    if ACPI_OSI_BANG not in unescaped:
        missing.append(ACPI_OSI_BANG)
    if not ("acpi_osi" in unescaped and "Windows 2009" in unescaped):
        missing.append(ACPI_OSI_WINDOWS_2009)
    return missing


def is_comment(line: str) -> bool:
    return bool(_COMMENT_RE.match(line))


def _patch_target_line(body: str, terminator: str) -> str | None:
    """Retourne la ligne cible patchée, ou None si `body` n'est pas la ligne cible."""
    m = _ASSIGNMENT_RE.match(body)
    if not m:
        return None
    prefix, raw_value = m.group(1), m.group(2)

    quote_char, inner = split_quoted_value(raw_value)
    value = AssignmentValue(quote_char=quote_char, tokens=inner.split())
    value.tokens.extend(missing_tokens(inner))
    return prefix + value.render() + terminator


def default_assignment_lines() -> list[str]:
    """Lignes ajoutées quand la clé est absente du fichier."""
    value = AssignmentValue(quote_char='"', tokens=list(DEFAULT_TOKENS))
    return [ADDED_BY_COMMENT + "\n", f"{CMDLINE_KEY}={value.render()}\n"]


def patch_cmdline_lines(lines: list[str]) -> CmdlinePatch:
    """Applique la transformation et indique si la clé a été trouvée/modifiée."""
    out: list[str] = []
    found = False
    for line in lines:
        if found or is_comment(line):
            out.append(line)
            continue
        body, terminator = split_line_terminator(line)
        patched = _patch_target_line(body, terminator)
        if patched is None:
            out.append(line)
            continue
        logger.debug(f"[patch_cmdline_lines] Ligne cible: {body!r}")
        out.append(patched)
        found = True

    if not found:
        logger.debug(f"[patch_cmdline_lines] {CMDLINE_KEY} absent, ajout en fin de fichier")
        if out and not split_line_terminator(out[-1])[1]:
            out[-1] += "\n"
        out.extend(default_assignment_lines())

    changed = out != list(lines)
    logger.debug(f"[patch_cmdline_lines] found={found}, changed={changed}, {len(lines)} -> {len(out)} lignes")
    return CmdlinePatch(lines=out, found=found, changed=changed)


def apply_tokens(lines: list[str]) -> list[str]:
    """Garantit la présence de `acpi_osi=!` et `acpi_osi=\\"Windows 2009\\"`.

    Args:
        lines: Lignes brutes du fichier, fins de ligne incluses.

    Returns:
        Nouvelles lignes. Même nombre de lignes si la clé existe, deux de plus
        sinon. Idempotent: `apply_tokens(apply_tokens(x)) == apply_tokens(x)`.
    """
    return patch_cmdline_lines(lines).lines
