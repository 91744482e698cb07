#!/usr/bin/env python3
"""
Load meal names into the catalog, one per line, skipping names already there.

    python scripts/seed_meals.py meals.txt
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from viandas.domain.business_rules import ValidationLimits
from viandas.domain.entities.meal_entity import Meal
from viandas.infrastructure.container.dependency_injection import DependencyContainer
from viandas.infrastructure.logging.logger_config import (
    options_from_settings,
    setup_logging,
)

logger = logging.getLogger(__name__)


def read_names(path: Path) -> list[str]:
    """Non-blank, de-duplicated lines; '#' starts a comment"""
    names: list[str] = []
    seen = set()
    for line in path.read_text(encoding="utf-8").splitlines():
        name = line.split("#", 1)[0].strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return names


async def seed_meals(container: DependencyContainer, names: list[str]) -> int:
    """Add the missing meals; returns the number added"""
    catalog = container.get_meal_catalog_use_case()
    existing = await catalog.list_meals()
    if not existing.success:
        logger.error("❌ Could not read the catalog: %s", existing.error_message)
        return 0
    known = {meal.name.lower() for meal in existing.meals}
    repository = container.get_meal_repository()

    added = 0
    for name in names:
        if name.lower() in known:
            continue
        if len(name) > ValidationLimits.MAX_NAME_LENGTH:
            logger.warning("⚠️ Skipped %r: name too long", name)
            continue
        await repository.create(Meal(id=None, name=name))
        known.add(name.lower())
        added += 1
    container.get_cache("meals").invalidate()
    return added


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the meal catalog")
    parser.add_argument("file", type=Path)
    args = parser.parse_args(argv)

    container = DependencyContainer()
    setup_logging(options_from_settings(container.config))
    try:
        container.database.create_tables()
        added = asyncio.run(seed_meals(container, read_names(args.file)))
    finally:
        container.cleanup()

    logger.info("🍱 %d meals added", added)
    return 0


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
