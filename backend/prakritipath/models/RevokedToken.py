from sqlmodel import SQLModel, Field
from datetime import datetime

class RevokedToken(SQLModel, table=True):
    __tablename__ = "revoked_tokens"

    token_id: str = Field(primary_key=True, description="SHA-256 digest of the revoked bearer token.")
    revoked_at: datetime = Field(description="Time of revocation.")
