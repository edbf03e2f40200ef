# src/studygroup_service/infrastructure/database/base_model.py
from datetime import datetime, timezone
from uuid import UUID, uuid4
from sqlalchemy import DateTime, text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """
    Base for all database models.

    Timestamps are timezone-aware UTC values stored in
    ``DateTime(timezone=True)`` columns.

    Example:
        class TagRecord(BaseModel, table=True):
            __tablename__ = "tags"
            title: str = Field(unique=True, index=True)
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")}
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": text("CURRENT_TIMESTAMP")}
    )
