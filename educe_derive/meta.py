"""Parsing of educe attribute text and of bounds."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import NamedTuple, Union

from .errors import EduceError

Lit = Union[str, int, float, bool]


@dataclass(frozen=True)
class MetaPath:
    """A bare path such as ``Clone``."""

    path: str


@dataclass(frozen=True)
class MetaList:
    """A path with a parenthesised list such as ``Clone(bound)``."""

    path: str
    nested: tuple = ()


@dataclass(frozen=True)
class MetaNameValue:
    """A path with a literal value such as ``method = "clone"``."""

    path: str
    lit: Lit


Meta = Union[MetaPath, MetaList, MetaNameValue]

_TOKEN_RE = re.compile(
    r"""
      (?P<space>\s+)
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<number>\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?)
    | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<colons>::)
    | (?P<punct>[(),=])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE_RE = re.compile(r"\\(u\{[0-9A-Fa-f]{1,6}\}|.)", re.DOTALL)
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}
_BOOLS = {"true": True, "false": False}


class _Token(NamedTuple):
    kind: str
    text: str


def _tokenize(text: str) -> list[_Token]:
    tokens = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise EduceError(f"Unable to parse `{text}`: unexpected character {text[pos]!r}.")
        pos = match.end()
        if match.lastgroup != "space":
            tokens.append(_Token(match.lastgroup, match.group()))
    return tokens


def _unescape(body: str) -> str:
    def replace(match: re.Match) -> str:
        code = match.group(1)
        if code.startswith("u{"):
            return chr(int(code[2:-1], 16))
        try:
            return _ESCAPES[code]
        except KeyError:
            raise EduceError(f"Unknown escape sequence `\\{code}`.") from None

    return _ESCAPE_RE.sub(replace, body)


def _number(text: str) -> int | float:
    digits = text.replace("_", "")
    if any(c in digits for c in ".eE"):
        return float(digits)
    return int(digits)


class _Parser:
    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = _tokenize(text)
        self._pos = 0

    def _error(self, reason: str) -> EduceError:
        return EduceError(f"Unable to parse `{self._text}`: {reason}.")

    def _peek(self) -> _Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of input")
        self._pos += 1
        return token

    def _accept(self, text: str) -> bool:
        token = self._peek()
        if token is not None and token.kind in ("punct", "colons") and token.text == text:
            self._pos += 1
            return True
        return False

    def finish(self) -> None:
        token = self._peek()
        if token is not None:
            raise self._error(f"unexpected `{token.text}`")

    def _ident(self) -> str:
        token = self._next()
        if token.kind != "ident":
            raise self._error(f"expected an identifier, found `{token.text}`")
        return token.text

    def path(self) -> str:
        leading = self._accept("::")
        parts = [self._ident()]
        while self._accept("::"):
            parts.append(self._ident())
        return ("::" if leading else "") + "::".join(parts)

    def meta(self) -> Meta:
        path = self.path()
        if self._accept("("):
            return MetaList(path, self._nested_list())
        if self._accept("="):
            return MetaNameValue(path, self._literal())
        return MetaPath(path)

    def _nested_list(self) -> tuple:
        items = []
        while not self._accept(")"):
            items.append(self._nested())
            if self._accept(")"):
                break
            if not self._accept(","):
                token = self._peek()
                found = "end of input" if token is None else f"`{token.text}`"
                raise self._error(f"expected `,` or `)`, found {found}")
        return tuple(items)

    def _nested(self) -> Meta | Lit:
        token = self._peek()
        if token is not None and (
            token.kind in ("string", "number") or (token.kind == "ident" and token.text in _BOOLS)
        ):
            return self._literal()
        return self.meta()

    def _literal(self) -> Lit:
        token = self._next()
        if token.kind == "string":
            return _unescape(token.text[1:-1])
        if token.kind == "number":
            return _number(token.text)
        if token.kind == "ident" and token.text in _BOOLS:
            return _BOOLS[token.text]
        raise self._error(f"expected a literal, found `{token.text}`")


def parse_meta(text: str) -> Meta:
    """Parse one attribute item such as ``Clone(bound = "T: Clone")``."""
    parser = _Parser(text)
    meta = parser.meta()
    parser.finish()
    return meta


def parse_path(text: str) -> str | None:
    """Normalise a path written in a string; ``None`` when it is blank."""
    if not text.strip():
        return None
    parser = _Parser(text)
    path = parser.path()
    parser.finish()
    return path


def _split_top_level(text: str) -> list[str]:
    parts = []
    depth = 0
    current = []
    previous = ""
    for char in text:
        if char in "<([":
            depth += 1
        elif char in ")]" or (char == ">" and previous != "-"):
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
        previous = char
    parts.append("".join(current))
    return parts


def _split_predicate(predicate: str) -> tuple[str, str]:
    depth = 0
    for index, char in enumerate(predicate):
        if char in "<([":
            depth += 1
        elif char in ">)]":
            depth -= 1
        elif char == ":" and depth == 0:
            before = predicate[index - 1] if index else ""
            after = predicate[index + 1] if index + 1 < len(predicate) else ""
            if before != ":" and after != ":":
                return predicate[:index].strip(), predicate[index + 1:].strip()
    raise EduceError(f"Unable to parse the where predicate `{predicate}`.")


def parse_where_predicates(text: str) -> tuple[str, ...] | None:
    """Split a where clause into predicates; ``None`` when it is blank."""
    if not text.strip():
        return None
    parts = [part.strip() for part in _split_top_level(text)]
    if len(parts) > 1 and not parts[-1]:
        parts.pop()
    predicates = []
    for part in parts:
        if not part:
            raise EduceError(f"Unable to parse the where predicates `{text}`.")
        lhs, rhs = _split_predicate(part)
        if not lhs or not rhs:
            raise EduceError(f"Unable to parse the where predicate `{part}`.")
        predicates.append(f"{lhs}: {rhs}")
    return tuple(predicates)


def predicates_for_generics(params: Iterable[str], bound: str) -> tuple[str, ...]:
    """Bound every generic type parameter by ``bound``; lifetimes are skipped."""
    return tuple(f"{param}: {bound}" for param in params if not str(param).startswith("'"))