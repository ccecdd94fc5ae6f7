"""Naming helpers for generated class, file and folder names.

These are pure string transforms; nothing here touches the filesystem.
"""

from __future__ import annotations

import re

__all__ = [
    "HANDLER_SUFFIX",
    "ensure_suffix",
    "handler_name",
    "main_class_name",
    "to_kebab_case",
    "to_pascal_case",
]


HANDLER_SUFFIX = "Handler"

_PASCAL_CASE = re.compile(r"^[A-Z][A-Za-z0-9]*$")
_WORD_SEPARATORS = re.compile(r"[-_\s]")
_LOWER_UPPER_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z])([A-Z][a-z])")


def to_pascal_case(value: str) -> str:
    """Convert ``user-created`` / ``user_created`` / ``user created`` to ``UserCreated``.

    A value that is already PascalCase is returned untouched, so acronyms
    such as ``XMLParser`` keep their capitals.

    Examples::

        to_pascal_case("user_created") -> "UserCreated"
        to_pascal_case("GET-order")    -> "GetOrder"
        to_pascal_case("CreateUser")   -> "CreateUser"
    """
    if _PASCAL_CASE.match(value):
        return value

    return "".join(
        fragment[:1].upper() + fragment[1:].lower()
        for fragment in _WORD_SEPARATORS.split(value)
    )


def to_kebab_case(value: str) -> str:
    """Convert ``UserCreatedEvent`` to ``user-created-event``.

    Acronym boundaries are split too: ``XMLHttpRequest`` -> ``xml-http-request``.
    """
    result = _LOWER_UPPER_BOUNDARY.sub(r"\1-\2", value)
    result = _ACRONYM_BOUNDARY.sub(r"\1-\2", result)
    result = result.lower()
    if result.startswith("-"):
        result = result[1:]
    return result


def ensure_suffix(name: str, suffix: str) -> str:
    """Append *suffix* to *name* unless it already ends with it (case-insensitive).

    Examples::

        ensure_suffix("UserCreated", "Event")      -> "UserCreatedEvent"
        ensure_suffix("UserCreatedEVENT", "Event") -> "UserCreatedEVENT"
    """
    if name.lower().endswith(suffix.lower()):
        return name
    return name + suffix


def handler_name(class_name: str) -> str:
    """Return the handler class name for *class_name*."""
    return class_name + HANDLER_SUFFIX


def main_class_name(handler: str) -> str:
    """Strip one trailing ``Handler`` from *handler*.

    Only a trailing occurrence is removed, so ``HandlerRegisteredEventHandler``
    yields ``HandlerRegisteredEvent``.
    """
    if handler.endswith(HANDLER_SUFFIX):
        return handler[: -len(HANDLER_SUFFIX)]
    return handler
