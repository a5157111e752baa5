import logging
from typing import Optional

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import Account
from app.auth.schemas import AccountInfo, LoginRequest, LoginResponse
from app.auth.security import access_token_for, verify_password
from app.core.enums import AccountStatus
from app.core.exceptions import ServiceError

logger = logging.getLogger(__name__)


async def login_account(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    # 1. Find account by email (case-insensitive)
    result = await db.execute(
        select(Account).where(func.lower(Account.email) == func.lower(payload.email))
    )
    account: Optional[Account] = result.scalar_one_or_none()
    if not account:
        raise ServiceError("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

    # 2. Verify password hash
    if not verify_password(payload.password, account.password_hash):
        logger.info("Rejected login for account %s: bad password", account.id)
        raise ServiceError("Invalid credentials", status.HTTP_401_UNAUTHORIZED)

    # 3. Check account status
    if account.status != AccountStatus.ACTIVE.value:
        raise ServiceError("Account is inactive", status.HTTP_403_FORBIDDEN)

    return LoginResponse(
        access_token=access_token_for(account.id, account.role),
        account=AccountInfo(
            id=account.id,
            name=account.full_name,
            email=account.email,
            role=account.role,
        ),
    )
