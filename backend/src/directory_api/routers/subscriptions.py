"""Newsletter subscription router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from directory_api.dependencies import get_subscription_service
from directory_api.models.dto.subscription import (
    SubscriptionInfo,
    SubscriptionRequest,
    SubscriptionResponse,
)
from directory_api.security.rate_limit import MUTATION_LIMIT, limiter
from directory_api.services.subscription_service import SubscriptionService

router = APIRouter()


@router.post("/subscribe", response_model=SubscriptionResponse)
@limiter.limit(MUTATION_LIMIT)
async def subscribe(
    request: Request,
    response: Response,
    body: SubscriptionRequest,
    service: Annotated[SubscriptionService, Depends(get_subscription_service)],
) -> SubscriptionResponse:
    """Subscribe to the newsletter. Subscribing an address twice is not an error."""
    created, subscription = await service.subscribe(body.email)

    if not created:
        response.status_code = status.HTTP_200_OK
        return SubscriptionResponse(message="Email is already subscribed to our newsletter.")

    response.status_code = status.HTTP_201_CREATED
    return SubscriptionResponse(
        message="Thank you for subscribing to our newsletter!",
        data=SubscriptionInfo.model_validate(subscription),
    )
