"""
Auth API routes — signup, login, current user.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.accounts import authenticate, create_account, update_account
from auth.dependencies import db_session, get_current_user
from auth.schemas import (
    AccountOut,
    AccountUpdate,
    AuthResponse,
    LoginRequest,
    SignupRequest,
)
from auth.tokens import TokenSigner, get_token_signer
from database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _auth_payload(user: User, signer: TokenSigner) -> Dict[str, Any]:
    return {
        "user": AccountOut.model_validate(user),
        "token": signer.issue(str(user.user_id)),
    }


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
    signer: TokenSigner = Depends(get_token_signer),
) -> Dict[str, Any]:
    """Register a new user."""
    user = await create_account(
        session,
        name=req.name,
        email=req.email,
        password=req.password,
    )
    return _auth_payload(user, signer)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    signer: TokenSigner = Depends(get_token_signer),
) -> Dict[str, Any]:
    """Login with email + password."""
    user = await authenticate(session, req.email, req.password)
    return _auth_payload(user, signer)


@router.get("/me", response_model=AccountOut)
async def me(user: User = Depends(get_current_user)) -> User:
    """Return the account the bearer token belongs to."""
    return user


@router.patch("/me", response_model=AccountOut)
async def update_me(
    changes: AccountUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> User:
    """Update name, email or password of the current account."""
    return await update_account(session, user, changes)
