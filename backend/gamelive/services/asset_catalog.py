"""Asset catalog - ids of the cosmetic assets a character may select.

Loaded once at startup from a YAML file (plain JSON also parses) and shared,
read-only, by every request.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

from gamelive.config import settings

logger = logging.getLogger(__name__)

CATEGORIES = ("hair", "top", "bottom", "shoes")


@dataclass(frozen=True)
class AssetCatalog:
    hair: frozenset[str] = field(default_factory=frozenset)
    top: frozenset[str] = field(default_factory=frozenset)
    bottom: frozenset[str] = field(default_factory=frozenset)
    shoes: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, raw: dict) -> "AssetCatalog":
        ids = {}
        for category in CATEGORIES:
            items = raw.get(category) or []
            ids[category] = frozenset(
                str(item["id"]) for item in items if isinstance(item, dict) and "id" in item
            )
        return cls(**ids)


def load_asset_catalog(path: str | Path) -> AssetCatalog:
    """Read the catalog file. A missing or broken file yields an empty catalog."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Asset catalog not found, using empty catalog", extra={"path": str(path), "error": str(e)})
        return AssetCatalog()

    catalog = AssetCatalog.from_dict(raw if isinstance(raw, dict) else {})
    logger.info(
        "Asset catalog loaded",
        extra={"path": str(path), **{c: len(getattr(catalog, c)) for c in CATEGORIES}},
    )
    return catalog


@lru_cache
def get_asset_catalog() -> AssetCatalog:
    """FastAPI dependency returning the process-wide catalog."""
    return load_asset_catalog(settings.ASSET_CATALOG_PATH)
