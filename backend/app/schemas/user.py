from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role


class LoginForm(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterForm(LoginForm):
    pass


class TokenUserInfo(BaseModel):
    """Reduced user projection carried inside the session token."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role
