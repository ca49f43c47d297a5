from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Literal, Optional

from .request_id import get_request_id

AuditAction = Literal[
    "reservation.created",
    "subscriber.upserted",
]

_audit_logger = logging.getLogger("audit")
_audit_logger.setLevel(logging.INFO)
if not _audit_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    _audit_logger.addHandler(handler)
_audit_logger.propagate = False


def _to_json_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _mask_email(email: Optional[str]) -> Optional[str]:
    if not email or "@" not in email:
        return None
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"


def emit_audit_log(
    *,
    action: AuditAction,
    record_id: Optional[int],
    simulated: bool = False,
    email: Optional[str] = None,
    party_size: Optional[int] = None,
    reservation_date: Optional[date] = None,
    status: Optional[Any] = None,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """Emit one compact JSON audit line. Raises RuntimeError if logging fails."""
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": "info",
        "action": action,
        "request_id": get_request_id(),
        "record_id": record_id,
        "simulated": simulated,
        "email": _mask_email(email),
        "party_size": party_size,
        "reservation_date": reservation_date,
        "status": status,
    }
    if extra:
        payload.update(extra)

    compact_payload = {k: _to_json_value(v) for k, v in payload.items() if v is not None}
    try:
        _audit_logger.info(json.dumps(compact_payload, ensure_ascii=True))
    except Exception as exc:
        raise RuntimeError("failed to emit audit log") from exc
