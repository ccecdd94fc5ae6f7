"""Light pattern extraction over generated and hand-written TypeScript.

This is deliberately not a parser.  The surface it understands is narrow:

* ``export class <Name>`` marker lines in generated artifacts
* top-level ``import ... from '...'`` statements
* bracket-delimited literals (``providers: [ ... ]``, ``@Module({ ... })``)

Bracket matching skips string literals and comments so that a ``]`` inside
``'...'`` or ``// ...`` does not close an array early.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Optional

__all__ = [
    "append_element",
    "barrel_entries",
    "contains_spread",
    "detect_newline",
    "element_indent",
    "extract_class_name",
    "extract_handler_name",
    "find_decorator_object",
    "find_matching_bracket",
    "find_providers_array",
    "insert_import",
    "iter_code",
    "last_code_index",
    "last_import_end",
    "line_indent",
]


HANDLER_CLASS_PATTERN = re.compile(r"export\s+class\s+(\w+Handler)\b")
EXPORTED_CLASS_PATTERN = re.compile(r"export\s+(?:abstract\s+)?class\s+(\w+)")
IMPORT_STATEMENT_PATTERN = re.compile(
    r"^[ \t]*import\b(?:[^;'\"]*?\bfrom)?\s*['\"][^'\"\n]+['\"][ \t]*;?",
    re.MULTILINE,
)
PROVIDERS_PATTERN = re.compile(r"\bproviders\s*:\s*\[")
BARREL_ENTRY_PATTERN = re.compile(r"^[ \t]+(\w+),[ \t]*\r?$", re.MULTILINE)

_BRACKET_PAIRS = {"[": "]", "{": "}", "(": ")"}
_QUOTES = "'\"`"


# ---------------------------------------------------------------------------
# Exported class markers
# ---------------------------------------------------------------------------

def extract_handler_name(content: str) -> Optional[str]:
    """Return the first exported class whose name ends in ``Handler``."""
    match = HANDLER_CLASS_PATTERN.search(content)
    return match.group(1) if match else None


def extract_class_name(content: str, suffix: str) -> Optional[str]:
    """Return the first exported class whose name ends in *suffix*.

    The suffix comparison is case-insensitive so ``SyncUsecase`` is found
    when looking for ``UseCase``.
    """
    wanted = suffix.lower()
    for match in EXPORTED_CLASS_PATTERN.finditer(content):
        name = match.group(1)
        if name.lower().endswith(wanted):
            return name
    return None


def barrel_entries(content: str) -> list[str]:
    """Names listed one per line in a barrel's exported array, in order."""
    return [match.group(1) for match in BARREL_ENTRY_PATTERN.finditer(content)]


def contains_spread(content: str, spread: str) -> bool:
    """Whether *spread* (e.g. ``...CommandHandlers``) appears as a whole token.

    ``...CommandHandlersV2`` does not count as ``...CommandHandlers``.
    """
    return re.search(re.escape(spread) + r"(?!\w)", content) is not None


# ---------------------------------------------------------------------------
# Import statements
# ---------------------------------------------------------------------------

def last_import_end(content: str) -> Optional[int]:
    """Return the offset just past the last import statement, or ``None``.

    Multi-line ``import { A,\\n B } from 'x';`` statements are matched as a
    whole.
    """
    end: Optional[int] = None
    for match in IMPORT_STATEMENT_PATTERN.finditer(content):
        end = match.end()
    return end


# ---------------------------------------------------------------------------
# Code scanning and bracket matching
# ---------------------------------------------------------------------------

def iter_code(content: str, start: int = 0, end: Optional[int] = None) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, char)`` for every character outside comments.

    String literals are yielded as their two quote characters only; their
    contents are skipped.
    """
    stop = len(content) if end is None else end
    i = start
    while i < stop:
        ch = content[i]
        nxt = content[i + 1] if i + 1 < stop else ""

        if ch == "/" and nxt == "/":
            newline = content.find("\n", i, stop)
            i = stop if newline == -1 else newline
            continue
        if ch == "/" and nxt == "*":
            close = content.find("*/", i + 2, stop)
            i = stop if close == -1 else close + 2
            continue

        if ch in _QUOTES:
            yield i, ch
            j = i + 1
            while j < stop and content[j] != ch:
                if content[j] == "\\":
                    j += 1
                elif content[j] == "\n" and ch != "`":
                    break
                j += 1
            if j < stop and content[j] == ch:
                yield j, ch
            i = j + 1
            continue

        yield i, ch
        i += 1


def find_matching_bracket(content: str, open_index: int) -> Optional[int]:
    """Return the offset of the bracket closing the one at *open_index*."""
    opener = content[open_index]
    closer = _BRACKET_PAIRS[opener]
    depth = 0
    for i, ch in iter_code(content, open_index):
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
    return None


def last_code_index(content: str, start: int, end: int) -> Optional[int]:
    """Offset of the last non-whitespace code character in ``[start, end)``."""
    last: Optional[int] = None
    for i, ch in iter_code(content, start, end):
        if not ch.isspace():
            last = i
    return last


def line_indent(content: str, offset: int) -> str:
    """Leading whitespace of the line containing *offset*."""
    line_start = content.rfind("\n", 0, offset) + 1
    indent = re.match(r"[ \t]*", content[line_start:])
    return indent.group(0) if indent else ""


# ---------------------------------------------------------------------------
# Module decorator structures
# ---------------------------------------------------------------------------

def find_decorator_object(content: str, decorator: str = "Module") -> Optional[tuple[int, int]]:
    """Locate the object literal passed to ``@<decorator>({ ... })``.

    Returns:
        ``(open_brace, close_brace)`` offsets, or ``None`` if the decorator
        is absent or its braces are unbalanced.
    """
    pattern = re.compile(rf"@{re.escape(decorator)}\s*\(\s*\{{")
    match = pattern.search(content)
    if not match:
        return None
    open_index = match.end() - 1
    close_index = find_matching_bracket(content, open_index)
    if close_index is None:
        return None
    return open_index, close_index


def find_providers_array(content: str, decorator: str = "Module") -> Optional[tuple[int, int]]:
    """Locate the ``providers: [ ... ]`` array of the module decorator.

    The search is restricted to the decorator's object when one exists.

    Returns:
        ``(open_bracket, close_bracket)`` offsets, or ``None``.
    """
    start, stop = 0, len(content)
    span = find_decorator_object(content, decorator)
    if span is not None:
        start, stop = span

    match = PROVIDERS_PATTERN.search(content, start, stop)
    if not match:
        return None
    open_index = match.end() - 1
    close_index = find_matching_bracket(content, open_index)
    if close_index is None:
        return None
    return open_index, close_index


# ---------------------------------------------------------------------------
# Additive text surgery
# ---------------------------------------------------------------------------

def detect_newline(content: str) -> str:
    """Return ``"\\r\\n"`` for CRLF files, ``"\\n"`` otherwise."""
    return "\r\n" if "\r\n" in content else "\n"


def insert_import(content: str, statement: str, newline: str = "\n") -> str:
    """Insert *statement* after the last import, or prepend it if there is none."""
    end = last_import_end(content)
    if end is None:
        return statement + newline + newline + content
    return content[:end] + newline + statement + content[end:]


def element_indent(content: str, open_index: int, close_index: int) -> str:
    """Indentation to use for a new element of the bracket literal at *open_index*.

    Follows the last existing element when it sits on its own line, and
    otherwise nests two spaces deeper than the opening line.
    """
    base = line_indent(content, open_index)
    last = last_code_index(content, open_index + 1, close_index)
    if last is None or content.rfind("\n", 0, last) < open_index:
        return base + "  "
    return line_indent(content, last)


def append_element(
    content: str,
    open_index: int,
    close_index: int,
    element: str,
    newline: str = "\n",
) -> str:
    """Append *element* as the last entry of the bracket literal.

    Works for array literals and object literals alike.  The existing
    trailing-comma style is kept and nothing outside the insertion point is
    modified.
    """
    inner = content[open_index + 1 : close_index]
    base = line_indent(content, open_index)
    indent = element_indent(content, open_index, close_index)
    last = last_code_index(content, open_index + 1, close_index)

    if last is None:
        if not inner.strip():
            body = f"{newline}{indent}{element},{newline}{base}"
            return content[: open_index + 1] + body + content[close_index:]
        # Only comments inside: keep them and add below.
        at = open_index + 1 + len(inner.rstrip())
        return content[:at] + f"{newline}{indent}{element}," + content[at:]

    trailing_comma = content[last] == ","

    if "\n" not in inner:
        addition = f" {element}," if trailing_comma else f", {element}"
        return content[: last + 1] + addition + content[last + 1 :]

    at = open_index + 1 + len(inner.rstrip())
    text = f"{newline}{indent}{element}" + ("," if trailing_comma else "")
    content = content[:at] + text + content[at:]
    if not trailing_comma:
        content = content[: last + 1] + "," + content[last + 1 :]
    return content
