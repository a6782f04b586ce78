from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .config import get_settings


@dataclass(frozen=True)
class PaginationDefaults:
    """Process-wide pagination parameters.

    ``size`` is the page-link window ``(edge_start, before_current,
    after_current, edge_end)``: how many page links to show at the start,
    before the current page, after it, and at the end of the nav.
    """

    items: int = 6
    size: tuple[int, int, int, int] = (1, 4, 4, 1)

    def __post_init__(self) -> None:
        if not _positive_int(self.items):
            raise ValueError(f"items must be a positive integer, got {self.items!r}")
        size = tuple(self.size)
        if len(size) != 4 or not all(_positive_int(value) for value in size):
            raise ValueError(f"size must be four positive integers, got {self.size!r}")
        object.__setattr__(self, "size", size)


def _positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _parse_size(value: str) -> tuple[int, ...]:
    try:
        return tuple(int(part.strip()) for part in value.split(",") if part.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid pagination size {value!r}") from exc


_defaults = PaginationDefaults()


def configure_pagination(
    items: int | None = None,
    size: tuple[int, int, int, int] | None = None,
) -> PaginationDefaults:
    """Set the process-wide defaults. Call once at startup."""
    global _defaults
    settings = get_settings()
    _defaults = PaginationDefaults(
        items=settings.pagination_items if items is None else items,
        size=_parse_size(settings.pagination_size) if size is None else size,
    )
    return _defaults


def get_pagination_defaults() -> PaginationDefaults:
    return _defaults


def parse_pagination(
    params: Mapping[str, str],
    defaults: PaginationDefaults | None = None,
    max_items: int = 100,
) -> tuple[int, int]:
    defaults = defaults or _defaults
    page = max(_int_param(params, "page", 1), 1)
    items = min(max(_int_param(params, "items", defaults.items), 1), max_items)
    return page, items


def _int_param(params: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(params.get(name, default))
    except (TypeError, ValueError):
        return default
