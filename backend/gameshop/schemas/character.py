"""Character Schemas: creation payload and the public/owner read view."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class CharacterCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class CharacterCreated(BaseModel):
    id: UUID


class CharacterView(BaseModel):
    """money is omitted unless the caller owns the character."""
    name: str
    health: int
    power: int
    money: int | None = None
