from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ChunkRecord(Base):
    __tablename__ = "terusrag_chunks"
    __table_args__ = (Index("ix_terusrag_chunks_hash_module", "contenthash", "moduleid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), default="")
    moduletype: Mapped[str] = mapped_column(String(50), nullable=False, default="course")
    moduleid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    contenthash: Mapped[str] = mapped_column(String(40), nullable=False)
    embedding: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON array
    timecreated: Mapped[int] = mapped_column(Integer, default=0)
    timemodified: Mapped[int] = mapped_column(Integer, default=0)


class ContentItemRecord(Base):
    """Content items (courses, activities) that chunks point back to."""

    __tablename__ = "terusrag_content_items"

    moduletype: Mapped[str] = mapped_column(String(50), primary_key=True)
    moduleid: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    visible: Mapped[bool] = mapped_column(default=True)
