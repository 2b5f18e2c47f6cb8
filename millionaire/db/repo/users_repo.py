from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.users import User


class UsersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, user_id: int) -> User | None:
        stmt = select(User).where(User.id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_api_token_hash(session: AsyncSession, api_token_hash: str) -> User | None:
        stmt = select(User).where(User.api_token_hash == api_token_hash)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(session: AsyncSession, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_top_by_balance(session: AsyncSession, *, limit: int = 50) -> list[User]:
        resolved_limit = max(1, min(500, int(limit)))
        stmt = (
            select(User)
            .order_by(User.balance.desc(), User.id.asc())
            .limit(resolved_limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        name: str,
        email: str,
        api_token_hash: str,
        created_at: datetime,
    ) -> User:
        user = User(
            name=name,
            email=email,
            api_token_hash=api_token_hash,
            balance=0,
            created_at=created_at,
        )
        session.add(user)
        await session.flush()
        return user

    @staticmethod
    async def credit_balance(session: AsyncSession, *, user_id: int, amount: int) -> int:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + amount)
            .returning(User.balance)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())
