"""Pydantic request/response schemas for the session API."""

from pydantic import BaseModel, Field, field_validator

from identity.shared.email import check_email_address


class CredentialsRequest(BaseModel):
    email: str = Field(max_length=254)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        return check_email_address(value.strip())

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "shopper@example.com",
                    "password": "correct-horse",
                }
            ]
        }
    }


class PrincipalSchema(BaseModel):
    user_id: str
    email: str | None = None


class SessionResponse(BaseModel):
    status: str
    principal: PrincipalSchema | None = None


class LogoutResponse(BaseModel):
    status: str
    redirect: str
