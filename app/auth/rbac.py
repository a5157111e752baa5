from fastapi import Depends, HTTPException, status

from app.auth.dependencies import get_current_account
from app.auth.schemas import CurrentAccount
from app.core.enums import AccountRole


def require_roles(*roles: AccountRole):
    """
    Dependency factory to restrict an endpoint to some account roles. ADMIN always passes.

    Example:
        Depends(require_roles(AccountRole.REVIEWER))
    """
    allowed = {r.value for r in roles} | {AccountRole.ADMIN.value}

    async def _checker(current_account: CurrentAccount = Depends(get_current_account)) -> CurrentAccount:
        if current_account.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_account

    return _checker
