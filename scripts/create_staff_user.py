#!/usr/bin/env python3
"""
Provision a staff profile that can sign in.

    python scripts/create_staff_user.py ana@example.com --role admin
"""

import argparse
import asyncio
import getpass
import logging
import sys

from dotenv import load_dotenv

from viandas.domain.entities.profile_entity import Role
from viandas.infrastructure.container.dependency_injection import DependencyContainer
from viandas.infrastructure.logging.logger_config import (
    options_from_settings,
    setup_logging,
)
from viandas.infrastructure.utilities.exceptions import ViandasError

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a staff profile")
    parser.add_argument("email")
    parser.add_argument(
        "--role", choices=[role.value for role in Role], default=Role.STAFF.value
    )
    parser.add_argument(
        "--password", help="Prompted for when omitted (avoids shell history)"
    )
    return parser.parse_args(argv)


async def create_staff_user(container: DependencyContainer, email: str, password: str, role: str) -> int:
    try:
        profile = await container.get_auth_service().register(email, password, Role(role))
    except ViandasError as e:
        logger.error("❌ Staff user not created: %s", e.user_message)
        return 1
    logger.info("✅ Staff user created: %s (%s)", profile.email, profile.role.value)
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")

    container = DependencyContainer()
    setup_logging(options_from_settings(container.config))
    try:
        container.database.create_tables()
        return asyncio.run(create_staff_user(container, args.email, password, args.role))
    finally:
        container.cleanup()


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
