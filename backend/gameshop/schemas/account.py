"""Account Schemas: sign-up and sign-in payloads.

Invariants:
    - login: lowercase letters and digits only
    - password: at least 6 characters, must equal confirm_password
"""

from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class SignUpRequest(BaseModel):
    login: str = Field(min_length=1, max_length=50, pattern=r"^[a-z0-9]+$")
    password: str = Field(min_length=6, max_length=128)
    confirm_password: str
    name: str = Field(min_length=1, max_length=50)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("password and confirm_password do not match")
        return self


class SignUpResponse(BaseModel):
    account_id: UUID
    login: str
    name: str


class SignInRequest(BaseModel):
    login: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
