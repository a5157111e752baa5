from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AccountInfo(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account: AccountInfo


class CurrentAccount(BaseModel):
    """Lightweight representation of the authenticated account for role checks.
    id is the account id; it is what the "me" endpoints pass on as the ambiguous id.
    """

    id: int
    role: str
