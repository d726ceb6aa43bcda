from __future__ import annotations

from pydantic import BaseModel, Field


class LoginIn(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenOut(BaseModel):
    token: str


class ClaimOut(BaseModel):
    type: str
    value: str


class TokenTestOut(BaseModel):
    message: str
    claims: list[ClaimOut]
