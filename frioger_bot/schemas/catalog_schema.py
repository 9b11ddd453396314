"""Product catalog models as shipped in catalog.json."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CatalogItem(BaseModel):
    """A single product line; field aliases follow the catalog file keys."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", alias="n")
    description: str = Field(default="", alias="d")
    tech_specs: Optional[tuple[str, ...]] = Field(default=None, alias="techSpecs")


class CatalogPage(BaseModel):
    """A catalog category page grouping related items."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    sub: str = ""
    items: tuple[CatalogItem, ...] = ()


class CatalogMatch(BaseModel):
    """Search hit: the matched item plus the category it was found under."""
    model_config = ConfigDict(frozen=True)

    item: CatalogItem
    category: str
    sub: str

    @property
    def name(self) -> str:
        return self.item.name
