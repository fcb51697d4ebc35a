# File: setup_admin.py
# Project: gaupalika-complaints
"""
Create the tables (if missing) and the admin account.

    python setup_admin.py            # create admin from ADMIN_USERNAME / ADMIN_PASSWORD / ADMIN_EMAIL
    python setup_admin.py --update   # reset password and reactivate an existing admin
"""

import argparse
import asyncio
import logging

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import SessionLocal, engine, init_models
from app.models.user import UserRole
from app.services import users as user_service

logger = logging.getLogger("app.setup_admin")


async def setup_admin(update: bool = False) -> int:
    if not settings.admin_password:
        logger.error("ADMIN_PASSWORD is not set")
        return 1

    await init_models()
    async with SessionLocal() as db:
        admin = await user_service.get_by_username(db, settings.admin_username)
        if admin and not update:
            logger.info(
                "Admin %s already exists (role=%s, active=%s, last login=%s). Use --update to reset it.",
                admin.username, admin.role.value, admin.is_active, admin.last_login or "never",
            )
            return 0
        if admin:
            await user_service.set_password(db, admin, settings.admin_password)
            logger.info("Admin %s password reset and account reactivated", admin.username)
            return 0
        await user_service.create_user(
            db,
            settings.admin_username,
            settings.admin_password,
            email=settings.admin_email,
            role=UserRole.admin,
        )
    return 0


async def _main(update: bool) -> int:
    try:
        return await setup_admin(update)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or update the admin account")
    parser.add_argument("--update", action="store_true", help="reset the password of an existing admin")
    args = parser.parse_args()
    configure_logging()
    raise SystemExit(asyncio.run(_main(args.update)))
