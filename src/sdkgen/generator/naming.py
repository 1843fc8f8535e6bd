"""Identifier casing helpers shared by the extractor and the emitter.

Word boundaries are runs of non-alphanumeric characters (``/``, ``{``,
``}``, ``-``, ``.``, spaces, ...) plus lower-to-upper camelCase
transitions. The helpers never reorder or drop alphanumeric characters.

Example::

    >>> pascal_case("/users/{id}/orders")
    'UsersIdOrders'
    >>> snake_case("getUsersIdOrders")
    'get_users_id_orders'
    >>> operation_id("get", "/users/{id}/orders")
    'getUsersIdOrders'
"""

from __future__ import annotations

import keyword
import re

_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")
_INVALID_IDENT_RE = re.compile(r"[^a-zA-Z0-9_]")


def _words(text: str) -> list[str]:
    return [w for w in _SEPARATOR_RE.split(text) if w]


def pascal_case(text: str) -> str:
    """Upper-case the first letter of every word and join them.

    Letters after the first are kept as written, so existing camelCase
    survives (``userId`` -> ``UserId``).
    """
    return "".join(w[0].upper() + w[1:] for w in _words(text))


def camel_case(text: str) -> str:
    """Like :func:`pascal_case` with a lower-case first letter."""
    result = pascal_case(text)
    return result[:1].lower() + result[1:]


def operation_id(method: str, path: str) -> str:
    """Synthesize an operation identifier from an HTTP method and path template.

    Deterministic for a given ``(method, path)``:
    ``("GET", "/users/{id}/orders")`` -> ``getUsersIdOrders``.
    """
    return method.lower() + pascal_case(path)


def snake_case(name: str) -> str:
    """Convert an arbitrary name into a valid snake_case Python identifier.

    Steps:

    1. camelCase boundaries become underscores (``petId`` -> ``pet_Id``).
    2. The result is lower-cased and every invalid character becomes ``_``.
    3. Repeated and edge underscores are collapsed; empty input yields
       ``"value"``.
    4. A leading digit gets an underscore prefix, a keyword a trailing
       underscore (``class`` -> ``class_``).
    """
    result = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    result = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", result)
    result = _INVALID_IDENT_RE.sub("_", result.lower())
    result = re.sub(r"_+", "_", result).strip("_")
    if not result:
        result = "value"
    if result[0].isdigit():
        result = f"_{result}"
    if keyword.iskeyword(result):
        result = f"{result}_"
    return result


def class_name(name: str) -> str:
    """PascalCase identifier usable as a Python class name."""
    result = pascal_case(name) or "Model"
    if result[0].isdigit():
        result = f"_{result}"
    if keyword.iskeyword(result):
        result = f"{result}_"
    return result


def distribution_name(title: str) -> str:
    """Project name for the generated ``pyproject.toml`` (``Pet Store`` -> ``pet-store-sdk``)."""
    return snake_case(title).strip("_").replace("_", "-") + "-sdk"
