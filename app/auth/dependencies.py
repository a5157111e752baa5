from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import Account
from app.auth.schemas import CurrentAccount
from app.core.config import settings
from app.core.enums import AccountStatus
from app.db.session import get_db


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login-oauth")


async def get_current_account(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentAccount:
    """Resolve the authenticated account from the access token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        raise credentials_exception

    account_id_raw = payload.get("account_id") or payload.get("sub")
    if not account_id_raw:
        raise credentials_exception
    try:
        account_id = int(account_id_raw)
    except (TypeError, ValueError):
        raise credentials_exception

    account = await db.get(Account, account_id)
    if not account or account.status != AccountStatus.ACTIVE.value:
        raise credentials_exception

    return CurrentAccount(id=account.id, role=account.role)
