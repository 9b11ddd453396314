"""
Product catalog lookup.

The catalog is loaded once at startup from catalog.json and wrapped in
an immutable CatalogIndex that the conversation engine receives at
construction. Lookups are plain substring scans over normalized text.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import TypeAdapter, ValidationError

from frioger_bot.schemas.catalog_schema import CatalogItem, CatalogMatch, CatalogPage
from frioger_bot.utils import normalize_text

logger = logging.getLogger(__name__)

# Shorter queries are usually menu digits or typos, not product names.
MIN_QUERY_LENGTH = 3

_PAGES_ADAPTER = TypeAdapter(list[CatalogPage])


class CatalogIndex:
    """Read-only product index preserving catalog order."""

    def __init__(self, pages: Iterable[CatalogPage] = ()) -> None:
        self._pages: tuple[CatalogPage, ...] = tuple(pages)
        # Pre-normalized search fields, in catalog order.
        self._entries: tuple[tuple[CatalogPage, CatalogItem, tuple[str, ...]], ...] = tuple(
            (page, item, _search_fields(item))
            for page in self._pages
            for item in page.items
        )

    @property
    def pages(self) -> tuple[CatalogPage, ...]:
        return self._pages

    def __len__(self) -> int:
        return len(self._entries)

    def find_product(self, query: Optional[str]) -> Optional[CatalogMatch]:
        """Return the first item whose name, description or spec contains the query."""
        if not query or len(query) < MIN_QUERY_LENGTH:
            return None
        needle = normalize_text(query)
        for page, item, fields in self._entries:
            if any(needle in field for field in fields):
                return CatalogMatch(item=item, category=page.title, sub=page.sub)
        return None


def _search_fields(item: CatalogItem) -> tuple[str, ...]:
    fields = [normalize_text(item.name), normalize_text(item.description)]
    fields.extend(normalize_text(spec) for spec in item.tech_specs or ())
    return tuple(fields)


def parse_catalog(raw: list[dict]) -> CatalogIndex:
    """Validate raw catalog pages and build an index from them."""
    return CatalogIndex(_PAGES_ADAPTER.validate_python(raw))


def load_catalog(path: Union[str, Path]) -> CatalogIndex:
    """Load catalog.json; a missing or unreadable file yields an empty index."""
    catalog_path = Path(path)
    if not catalog_path.exists():
        logger.warning("Catalog file %s not found. Product search is disabled.", catalog_path)
        return CatalogIndex()
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
        index = parse_catalog(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.error("Failed to read catalog %s: %s", catalog_path, exc)
        return CatalogIndex()
    logger.info("Catalog loaded: %d items from %s", len(index), catalog_path)
    return index
