from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar


T = TypeVar("T")


def sort_once(
    values: Iterable[T],
    *,
    source: str,
    key: Callable[[T], Any] | None = None,
) -> list[T]:
    """Sort a carrier exactly once at a normalization boundary.

    `source` names the boundary in the error raised for incomparable keys.
    """
    try:
        return sorted(values, key=key)
    except TypeError as exc:
        raise TypeError(f"sort_once: incomparable keys at {source}: {exc}") from exc
