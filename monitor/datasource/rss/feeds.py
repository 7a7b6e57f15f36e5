"""
Feed list configuration, loaded from YAML.
"""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, Field, HttpUrl, ValidationError


class FeedSource(BaseModel):
    name: str
    url: HttpUrl


class FeedsConfig(BaseModel):
    categories: dict[str, list[FeedSource]] = Field(default_factory=dict)

    def feeds_for(self, category: str) -> list[FeedSource]:
        return self.categories.get(category, [])

    @property
    def category_names(self) -> list[str]:
        return list(self.categories)


def load_feeds_config(path: str | Path) -> FeedsConfig:
    """
    Read the feed list. A missing or malformed file yields an empty config;
    entries without a name or url are dropped.
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Feeds config not found: {path}")
        return FeedsConfig()

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse feeds config {path}: {e}")
        return FeedsConfig()

    categories: dict[str, list[FeedSource]] = {}
    for category, entries in (raw.get("categories") or {}).items():
        feeds = []
        for entry in entries or []:
            if not isinstance(entry, dict) or not entry.get("name") or not entry.get("url"):
                continue
            try:
                feeds.append(FeedSource(**entry))
            except ValidationError as e:
                logger.warning(f"Skipping feed {entry.get('name')} in {category}: {e}")
        categories[str(category)] = feeds

    config = FeedsConfig(categories=categories)
    total = sum(len(f) for f in categories.values())
    logger.info(f"Loaded {total} feeds in {len(categories)} categories from {path}")
    return config
