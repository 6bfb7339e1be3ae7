"""Record of an upload that could not be imported cleanly."""
from sqlalchemy import Boolean, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from statement_import.models.base import BaseModel


class FailedImport(BaseModel):
    """An uploaded statement kept for support to review.

    The file itself lives in object storage under ``file_path``.
    """

    __tablename__ = "failed_imports"

    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(500), nullable=False, unique=True)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    format_id: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    error_summary: Mapped[str] = mapped_column(Text, nullable=False)
    reviewed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    def __repr__(self) -> str:
        return f"<FailedImport(id={self.id}, file_name={self.file_name!r})>"
