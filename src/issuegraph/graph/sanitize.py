"""Escaping and truncation primitives shared by every output format.

Truncation counts runes (code points), never bytes, and only cuts between
user-perceived characters: combining marks, variation selectors, ZWJ emoji
sequences, flag pairs and escape sequences produced for a target format are
kept or dropped as a whole. The result including the ellipsis never exceeds
the requested rune count.
"""

import html
import re
import unicodedata
from enum import Enum

ELLIPSIS = "..."
FALLBACK_ID = "node"

_LINEBREAK_RE = re.compile(r"[\r\n]+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_SURROGATE_RE = re.compile("[\ud800-\udfff]")
_XML_INVALID_RE = re.compile("[\ud800-\udfff\ufffe\uffff]")

_ZWJ = "\u200d"


class LabelTarget(str, Enum):
    """Output grammars a label can be sanitized for."""
    PLAIN = "plain"
    DOT = "dot"
    MERMAID = "mermaid"
    XML = "xml"


_REPLACEMENTS: dict[LabelTarget, dict[str, str]] = {
    LabelTarget.PLAIN: {},
    LabelTarget.DOT: {
        "\\": "\\\\",
        '"': '\\"',
    },
    LabelTarget.MERMAID: {
        '"': "'",
        "[": "(",
        "]": ")",
        "{": "(",
        "}": ")",
        "<": "&lt;",
        ">": "&gt;",
        "|": "/",
        "`": "'",
    },
    LabelTarget.XML: {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
    },
}


def _is_regional_indicator(ch: str) -> bool:
    return "\U0001f1e6" <= ch <= "\U0001f1ff"


def _extends_previous(ch: str, previous: str) -> bool:
    """True when ``ch`` belongs to the character cluster ending in ``previous``."""
    if previous.endswith(_ZWJ) or ch == _ZWJ:
        return True
    if unicodedata.category(ch).startswith("M"):
        return True
    if "\ufe00" <= ch <= "\ufe0f" or "\U000e0100" <= ch <= "\U000e01ef":
        return True
    if "\U0001f3fb" <= ch <= "\U0001f3ff":  # skin tone modifiers
        return True
    if _is_regional_indicator(ch):
        # Flags are pairs; only join onto an unpaired indicator.
        return len(previous) == 1 and _is_regional_indicator(previous)
    return False


def _clusters(text: str, replacements: dict[str, str]) -> list[str]:
    """Split text into indivisible units, escaping each character on the way."""
    units: list[str] = []
    raw_units: list[str] = []
    for ch in text:
        piece = replacements.get(ch, ch)
        if raw_units and _extends_previous(ch, raw_units[-1]):
            units[-1] += piece
            raw_units[-1] += ch
        else:
            units.append(piece)
            raw_units.append(ch)
    return units


def _fit(units: list[str], max_runes: int | None) -> str:
    if max_runes is None:
        return "".join(units)
    if max_runes <= 0:
        return ""
    if sum(len(unit) for unit in units) <= max_runes:
        return "".join(units)

    with_ellipsis = max_runes > len(ELLIPSIS)
    budget = max_runes - len(ELLIPSIS) if with_ellipsis else max_runes

    kept: list[str] = []
    used = 0
    for unit in units:
        if used + len(unit) > budget:
            break
        kept.append(unit)
        used += len(unit)

    result = "".join(kept)
    return result + ELLIPSIS if with_ellipsis else result


def truncate_runes(text: str, max_runes: int) -> str:
    """Shorten text to at most ``max_runes`` code points, ending in '...' when cut."""
    return _fit(_clusters(text or "", {}), max_runes)


def sanitize_label(raw: str | None, max_runes: int | None = None,
                   target: LabelTarget = LabelTarget.MERMAID) -> str:
    """Make free text safe for a node label in the given target grammar.

    Line breaks become a single space, remaining control characters are
    dropped, surrounding whitespace is trimmed, syntax-significant characters
    are replaced per target and the result is truncated to ``max_runes``.
    """
    text = _LINEBREAK_RE.sub(" ", raw or "")
    text = _SURROGATE_RE.sub("", _CONTROL_RE.sub("", text))
    if target == LabelTarget.XML:
        text = _XML_INVALID_RE.sub("", text)
    text = text.strip()
    return _fit(_clusters(text, _REPLACEMENTS[target]), max_runes)


def sanitize_id(raw: str | None) -> str:
    """Keep only letters, digits, '-' and '_'; fall back to 'node' when empty."""
    kept = "".join(ch for ch in (raw or "") if ch.isalpha() or ch.isdecimal() or ch in "-_")
    return kept or FALLBACK_ID


def escape_dot(text: str | None) -> str:
    """Escape a value for use inside a double-quoted DOT string."""
    text = _LINEBREAK_RE.sub(" ", text or "")
    text = _SURROGATE_RE.sub("", _CONTROL_RE.sub("", text))
    return text.replace("\\", "\\\\").replace('"', '\\"')


def escape_xml(text: str | None) -> str:
    """Escape character data and attribute values for SVG/XML output."""
    text = _LINEBREAK_RE.sub(" ", text or "")
    text = _XML_INVALID_RE.sub("", _CONTROL_RE.sub("", text))
    return html.escape(text, quote=True)


def fnv32a(value: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 encoding of ``value``."""
    h = 0x811C9DC5
    for byte in value.encode("utf-8", errors="surrogatepass"):
        h ^= byte
        h = (h * 0x01000193) & 0xFFFFFFFF
    return h


class SafeIdRegistry:
    """Collision-free diagram identifiers for a single render call.

    The same original ID always maps to the same safe ID. When two originals
    sanitize to the same base, the later one gets an 8-hex-digit FNV-1a
    suffix derived from its original ID.
    """

    def __init__(self) -> None:
        self._by_original: dict[str, str] = {}
        self._used: set[str] = set()

    def get(self, original: str) -> str:
        safe = self._by_original.get(original)
        if safe is not None:
            return safe

        base = sanitize_id(original)
        safe = base
        if safe in self._used:
            hashed = f"{base}_{fnv32a(original):08x}"
            safe = hashed
            counter = 2
            while safe in self._used:
                safe = f"{hashed}_{counter}"
                counter += 1

        self._used.add(safe)
        self._by_original[original] = safe
        return safe

    def __contains__(self, original: str) -> bool:
        return original in self._by_original
