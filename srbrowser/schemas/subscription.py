from datetime import UTC, datetime

from pydantic import BaseModel

from srbrowser.core.enums import EntityType
from srbrowser.models.subscription import Subscription


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without an offset
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SubscriptionRead(BaseModel):
    type: EntityType
    resource_id: str
    topic: str
    created_at: datetime

    @classmethod
    def from_model(cls, subscription: Subscription) -> "SubscriptionRead":
        return cls(
            type=subscription.type,
            resource_id=subscription.resource_id,
            topic=subscription.fcm_topic,
            created_at=_as_utc(subscription.created_at),
        )
