from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.users import User
from millionaire.db.repo.users_repo import UsersRepo

TOKEN_BYTES = 32


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Identity of one inbound request."""

    user: User | None

    @property
    def user_id(self) -> int | None:
        return self.user.id if self.user is not None else None


def generate_api_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_api_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def extract_bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization")
    if not header:
        return None
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = value.strip()
    return token or None


async def resolve_request_user(session: AsyncSession, request: Request) -> User | None:
    token = extract_bearer_token(request)
    if token is None:
        return None
    return await UsersRepo.get_by_api_token_hash(session, hash_api_token(token))


async def build_request_context(session: AsyncSession, request: Request) -> RequestContext:
    return RequestContext(user=await resolve_request_user(session, request))
