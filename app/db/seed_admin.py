"""
Seed script to create the first ADMIN account.

Run once (e.g. after init_db) with env set:
  ADMIN_EMAIL=admin@school.example
  ADMIN_PASSWORD=YourSecurePassword

Creates the account if the email is unknown; otherwise promotes it to ADMIN and
resets its password.
"""
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import Account
from app.auth.security import hash_password
from app.core.config import settings
from app.core.enums import AccountRole, AccountStatus
from app.core.logging import configure_logging
from app.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_FULL_NAME = "Defense Planning Admin"


async def seed_admin(db: AsyncSession, email: str, password: str) -> Account:
    result = await db.execute(select(Account).where(func.lower(Account.email) == email.lower()))
    account = result.scalar_one_or_none()
    if not account:
        account = Account(
            email=email,
            full_name=DEFAULT_ADMIN_FULL_NAME,
            password_hash=hash_password(password),
            role=AccountRole.ADMIN.value,
            status=AccountStatus.ACTIVE.value,
        )
        db.add(account)
        logger.info("Created ADMIN account: %s", email)
    else:
        account.role = AccountRole.ADMIN.value
        account.status = AccountStatus.ACTIVE.value
        account.password_hash = hash_password(password)
        logger.info("Updated existing account to ADMIN: %s", email)
    await db.commit()
    await db.refresh(account)
    return account


async def main() -> None:
    configure_logging(settings.log_level)
    if not settings.admin_email or not settings.admin_password:
        logger.warning("ADMIN_EMAIL / ADMIN_PASSWORD not set; nothing to seed.")
        return
    async with AsyncSessionLocal() as db:
        try:
            await seed_admin(db, settings.admin_email, settings.admin_password)
        except Exception:
            await db.rollback()
            logger.exception("Admin seed failed")
            raise


if __name__ == "__main__":
    asyncio.run(main())
