"""Identifier casing helpers for names taken from a Prisma schema."""

from __future__ import annotations

import re

_NUMBER_SEQUENCE = re.compile(r"([a-zA-Z])([0-9]+)([a-zA-Z]?)")
_TITLE_WORD = re.compile(r"[A-Z][a-z]*[0-9]*")

_INITIALISMS = frozenset(
    {
        "ACL", "API", "ASCII", "CPU", "CSS", "DNS", "EOF", "GUID", "HTML",
        "HTTP", "HTTPS", "ID", "IP", "JSON", "LHS", "QPS", "RAM", "RHS",
        "RPC", "SLA", "SMTP", "SQL", "SSH", "TCP", "TLS", "TTL", "UDP",
        "UI", "UID", "UUID", "URI", "URL", "UTF8", "VM", "XML", "XMPP",
        "XSRF", "XSS",
    }
)

_BUILTIN = {
    "ID": "string",
    "String": "string",
    "Boolean": "bool",
    "Int": "int",
    "Float": "float64",
    "DateTime": "DateTime",
    "Json": "JSON",
    "Bytes": "Bytes",
    "BigInt": "BigInt",
}


def _to_camel_init_case(text: str, init_case: bool) -> str:
    text = _NUMBER_SEQUENCE.sub(r"\1 \2 \3", text).strip(" ")
    out = []
    cap_next = init_case
    for char in text:
        if "A" <= char <= "Z" or "0" <= char <= "9":
            out.append(char)
        elif "a" <= char <= "z":
            out.append(char.upper() if cap_next else char)
        cap_next = char in "_ -"
    return "".join(out)


def to_camel(text: str) -> str:
    """Convert to UpperCamelCase, dropping separators and other symbols."""
    return _to_camel_init_case(text, True)


def to_lower_camel(text: str) -> str:
    """Convert to lowerCamelCase."""
    if not text:
        return text
    if "A" <= text[0] <= "Z":
        text = text[0].lower() + text[1:]
    return _to_camel_init_case(text, False)


def _initialism(match: re.Match) -> str:
    word = match.group()
    if word.upper() in _INITIALISMS:
        return word.upper()
    letters = word.rstrip("0123456789")
    if letters.upper() in _INITIALISMS:
        return letters.upper() + word[len(letters):]
    return word


def apply_initialisms(text: str) -> str:
    """Upper-case capitalised words that are common initialisms (Id -> ID)."""
    return _TITLE_WORD.sub(_initialism, text)


class String(str):
    """A string with casing helpers for generated identifiers."""

    def go_case(self) -> str:
        return apply_initialisms(to_camel(self))

    def go_lower_case(self) -> str:
        return apply_initialisms(to_lower_camel(self))

    def camel_case(self) -> str:
        return to_lower_camel(self)

    def tag(self) -> str:
        """Return the struct tag mapping this name to a JSON key."""
        return f'`json:"{self}"`'


class Type(str):
    """A schema type name with casing helpers and native type lookup."""

    def value(self) -> str:
        """Return the native type for a builtin, else the cased type name."""
        return _BUILTIN.get(str(self), self.go_case())

    def go_case(self) -> str:
        return apply_initialisms(to_camel(self))

    def go_lower_case(self) -> str:
        return apply_initialisms(to_lower_camel(self))

    def camel_case(self) -> str:
        return to_lower_camel(self)