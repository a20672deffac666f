from datetime import datetime, timezone
from typing import Optional
from sqlmodel import Field, SQLModel
import hashlib

GENESIS_HASH = "00000000000000000000000000000000"

class AuditLog(SQLModel, table=True):
    __tablename__ = "audit_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc).replace(microsecond=0))
    actor_id: int = Field(index=True) # 0 when the actor is unknown (e.g. failed login)
    actor_role: str = Field(default="")
    action: str
    details: str
    previous_hash: str
    current_hash: str

    def calculate_hash(self) -> str:
        """
        Concatenates previous_hash + timestamp (isoformat) + str(actor_id) + actor_role + action + details
        and returns the SHA-256 hexdigest.
        """
        # Normalize to naive UTC string to handle DB roundtrip (SQLite stores as string, loses tz)
        ts_str = self.timestamp.replace(tzinfo=None).isoformat()

        data = (
            self.previous_hash +
            ts_str +
            str(self.actor_id) +
            self.actor_role +
            self.action +
            self.details
        )
        return hashlib.sha256(data.encode("utf-8")).hexdigest()
