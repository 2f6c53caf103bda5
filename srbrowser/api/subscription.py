from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from srbrowser.core.enums import EntityType
from srbrowser.schemas.common import APIResponse
from srbrowser.schemas.subscription import SubscriptionRead
from srbrowser.services.subscription import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("/")
async def get_subscriptions(
    service: Annotated[SubscriptionService, Depends()],
    entity_type: Annotated[EntityType | None, Query(alias="type")] = None,
) -> APIResponse[list[SubscriptionRead]]:
    subscriptions = await service.get_subscriptions(entity_type)
    return APIResponse(data=[SubscriptionRead.from_model(s) for s in subscriptions])


@router.get("/{entity_type}/{resource_id}")
async def get_subscription(
    entity_type: EntityType, resource_id: str, service: Annotated[SubscriptionService, Depends()]
) -> APIResponse[SubscriptionRead]:
    subscription = await service.get_subscription(entity_type, resource_id)
    if not subscription:
        raise HTTPException(status_code=404, detail="Not subscribed")
    return APIResponse(data=SubscriptionRead.from_model(subscription))


@router.put("/{entity_type}/{resource_id}")
async def subscribe(
    entity_type: EntityType, resource_id: str, service: Annotated[SubscriptionService, Depends()]
) -> APIResponse[SubscriptionRead]:
    subscription = await service.subscribe(entity_type, resource_id)
    return APIResponse(
        data=SubscriptionRead.from_model(subscription), message="Subscribed successfully"
    )


@router.delete("/{entity_type}/{resource_id}")
async def unsubscribe(
    entity_type: EntityType, resource_id: str, service: Annotated[SubscriptionService, Depends()]
) -> APIResponse[None]:
    deleted = await service.unsubscribe(entity_type, resource_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Not subscribed")
    return APIResponse(message="Unsubscribed successfully")
