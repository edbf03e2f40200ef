"""SQLModel table for tags."""

from sqlmodel import Field

from studygroup_service.infrastructure.database.base_model import BaseModel


class TagRecord(BaseModel, table=True):
    """A shared label. ``title`` is unique and case-sensitive."""

    __tablename__ = "tags"

    title: str = Field(
        nullable=False,
        unique=True,
        index=True,
        description="Tag title (unique)",
    )

    def __repr__(self) -> str:
        return f"<TagRecord(id={self.id}, title={self.title!r})>"
