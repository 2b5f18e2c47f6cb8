from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.analytics_events import AnalyticsEvent


class AnalyticsRepo:
    @staticmethod
    async def create_event(
        session: AsyncSession,
        *,
        event_type: str,
        source: str,
        user_id: int | None,
        payload: dict[str, object],
        happened_at: datetime,
    ) -> AnalyticsEvent:
        event = AnalyticsEvent(
            event_type=event_type,
            source=source,
            user_id=user_id,
            payload=payload,
            happened_at=happened_at,
        )
        session.add(event)
        await session.flush()
        return event

    @staticmethod
    async def list_event_types_for_user(session: AsyncSession, *, user_id: int) -> list[str]:
        stmt = (
            select(AnalyticsEvent.event_type)
            .where(AnalyticsEvent.user_id == user_id)
            .order_by(AnalyticsEvent.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
