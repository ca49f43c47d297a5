from typing import Optional

from ..domain.errors import PersistenceError, ValidationError
from ..domain.repositories import SubscriberRepository
from ..domain.results import Err, Ok, Result
from ..domain.validation import check_email
from ..models import Subscriber


async def subscribe(
    sub_repo: SubscriberRepository,
    *,
    email: Optional[str],
    name: Optional[str] = None,
) -> Result[Subscriber]:
    """Register or refresh a newsletter subscriber keyed by email (last write wins)."""
    if email is None or not email.strip():
        return Err(ValidationError("email is required", missing_fields=["email"]))
    try:
        normalized = check_email(email)
    except ValidationError as exc:
        return Err(exc)
    try:
        subscriber = await sub_repo.upsert(normalized, name or None)
    except PersistenceError as exc:
        return Err(exc)
    return Ok(subscriber)
