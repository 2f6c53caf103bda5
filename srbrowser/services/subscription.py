from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from srbrowser.core.db import get_db
from srbrowser.core.enums import EntityType
from srbrowser.models.subscription import Subscription


class SubscriptionService:
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.db = db

    async def get_subscriptions(self, type_: EntityType | None = None) -> Sequence[Subscription]:
        statement = select(Subscription).order_by(col(Subscription.created_at))
        if type_ is not None:
            statement = statement.where(col(Subscription.type) == type_)

        result = await self.db.exec(statement)
        return result.all()

    async def get_subscription(self, type_: EntityType, resource_id: str) -> Subscription | None:
        return await self.db.get(Subscription, (type_, resource_id))

    async def subscribe(self, type_: EntityType, resource_id: str) -> Subscription:
        """Subscribe to an entity. Subscribing twice keeps the existing record."""
        existing = await self.get_subscription(type_, resource_id)
        if existing is not None:
            return existing

        subscription = Subscription(type=type_, resource_id=resource_id)
        self.db.add(subscription)
        await self.db.commit()
        await self.db.refresh(subscription)

        logger.info(f"Subscribe: {subscription.fcm_topic}")
        return subscription

    async def unsubscribe(self, type_: EntityType, resource_id: str) -> bool:
        subscription = await self.get_subscription(type_, resource_id)
        if subscription is None:
            return False

        await self.db.delete(subscription)
        await self.db.commit()

        logger.info(f"Unsubscribe: {subscription.fcm_topic}")
        return True
