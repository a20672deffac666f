import http
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Session, select

from ..models.Audit import AuditLog, GENESIS_HASH


def describe(method: str, path: str, status_code: int) -> str:
    """
    Builds the action string stored in the audit chain, e.g. "POST /logout 200 OK".
    """
    return f"{method} {path} {status_code} {http.HTTPStatus(status_code).phrase}"


def log_event(
    db: Session,
    actor_id: int,
    action: str,
    details: Optional[str] = None,
    actor_role: str = "",
) -> AuditLog:
    """
    Logs a new event to the AuditLog chain.
    """
    last_entry = db.exec(select(AuditLog).order_by(AuditLog.id.desc())).first()

    if last_entry:
        previous_hash = last_entry.current_hash
    else:
        previous_hash = GENESIS_HASH

    new_log = AuditLog(
        actor_id=actor_id,
        actor_role=actor_role,
        action=action,
        details=details or "",
        previous_hash=previous_hash,
        current_hash="", # Placeholder, will be calculated
        timestamp=datetime.now(timezone.utc).replace(microsecond=0)
    )
    new_log.current_hash = new_log.calculate_hash()

    db.add(new_log)
    db.commit()
    db.refresh(new_log)

    return new_log


def verify_chain(db: Session) -> Optional[int]:
    """
    Recomputes the whole chain and returns the id of the first broken entry,
    or None when the chain is intact.
    """
    previous_hash = GENESIS_HASH
    for entry in db.exec(select(AuditLog).order_by(AuditLog.id.asc())):
        if entry.previous_hash != previous_hash or entry.calculate_hash() != entry.current_hash:
            return entry.id
        previous_hash = entry.current_hash
    return None
