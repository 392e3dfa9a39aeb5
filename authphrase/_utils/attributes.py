from __future__ import annotations

from typing import Any

from authphrase.errors import MissingAttributeError, RedundantAttributeError

__all__ = ["choose", "require"]


def choose(field: str, **candidates: Any) -> tuple[str, Any] | None:
    """
    pick the single attribute used to specify *field*.

    each keyword is one alternative spelling of the field
    (e.g. ``salt=...``, ``salt_base64=...``); ``None`` means not given.

    :returns: ``(name, value)`` of the given alternative, or None if none was.
    :raises RedundantAttributeError: if more than one alternative was given.
    """
    given = tuple(name for name, value in candidates.items() if value is not None)
    if len(given) > 1:
        raise RedundantAttributeError(field, given)
    if not given:
        return None
    name = given[0]
    return name, candidates[name]


def require(field: str, choice: tuple[str, Any] | None) -> tuple[str, Any]:
    if choice is None:
        raise MissingAttributeError(field)
    return choice
