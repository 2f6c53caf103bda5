from datetime import datetime

import sqlmodel

from srbrowser.core.enums import EntityType
from srbrowser.utils.misc import get_utc_now

from ._base import BaseModel


class Subscription(BaseModel, table=True):
    __tablename__: str = "subscriptions"

    type: EntityType = sqlmodel.Field(primary_key=True)
    resource_id: str = sqlmodel.Field(primary_key=True, max_length=64)
    created_at: datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True)
    )

    @property
    def fcm_topic(self) -> str:
        """Push notification topic the client registers for this subscription."""
        return f"{self.type}_{self.resource_id}"
