from __future__ import annotations

from fastapi import APIRouter, Depends

from app.schemas.auth import ClaimOut, LoginIn, TokenOut, TokenTestOut
from app.security.dependencies import get_current_claims, get_token_service
from app.token_util import TokenClaims, TokenService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, tokens: TokenService = Depends(get_token_service)) -> TokenOut:
    # InvalidCredentialsError is mapped to a generic 401 in app.main.
    return TokenOut(token=tokens.issue(payload.username, payload.password))


@router.get("/test-token", response_model=TokenTestOut)
def echo_token_claims(claims: TokenClaims = Depends(get_current_claims)) -> TokenTestOut:
    return TokenTestOut(
        message="Token received",
        claims=[ClaimOut(**c) for c in claims.to_claim_list()],
    )
