from fastapi import APIRouter, Depends

from ..deps import get_subscriber_repo
from ..domain.repositories import SubscriberRepository
from ..domain.results import Err
from ..schemas import NewsletterSubscribe, SubscriberRead, SubscriptionConfirmation
from ..usecases import newsletter as newsletter_usecase
from ..utils.audit_log import emit_audit_log
from .errors import http_error

router = APIRouter(prefix="", tags=["newsletter"])


@router.post("/newsletter", response_model=SubscriptionConfirmation)
async def subscribe(
    payload: NewsletterSubscribe,
    sub_repo: SubscriberRepository = Depends(get_subscriber_repo),
) -> SubscriptionConfirmation:
    result = await newsletter_usecase.subscribe(sub_repo, email=payload.email, name=payload.name)
    if isinstance(result, Err):
        raise http_error(result.error)

    subscriber = result.value
    emit_audit_log(
        action="subscriber.upserted",
        record_id=subscriber.id,
        simulated=subscriber.id is None,
        email=subscriber.email,
    )
    return SubscriptionConfirmation(
        message="Successfully subscribed to the newsletter",
        subscriber=SubscriberRead.from_db(subscriber=subscriber),
    )
