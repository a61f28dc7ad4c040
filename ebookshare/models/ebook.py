"""ORM model for uploaded eBooks."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from ebookshare.models.base import Base


class Ebook(Base):
    """
    Uploaded eBook with a denormalized snapshot of its uploader.

    uploader_* columns are written once at upload and are not kept in sync
    with later edits to the user. uploader_id is a plain column, not a foreign
    key; ownership lives in the user's uploaded_books list.
    """

    __tablename__ = "ebooks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(512), nullable=False, index=True)
    author = Column(String(512), nullable=False, index=True)
    genre = Column(String(255), nullable=False, index=True)
    publication_year = Column(Integer, nullable=False, index=True)
    content = Column(Text, nullable=False)
    uploader_id = Column(Integer, nullable=True, index=True)
    uploader_username = Column(String(255), nullable=True, index=True)
    uploader_email = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
