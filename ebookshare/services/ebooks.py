"""eBook upload, search, metadata edit and delete, gated by uploader/admin ownership."""

import logging
from typing import Literal

from sqlalchemy import func
from sqlalchemy.orm import Session

from ebookshare.core.errors import Forbidden, InvalidInput, NotFound
from ebookshare.models import Ebook, User
from ebookshare.schemas.ebook import EbookCreate, EbookEdit

logger = logging.getLogger(__name__)

SearchField = Literal["title", "author", "genre", "year", "uploader"]

_TEXT_COLUMNS = {
    "title": Ebook.title,
    "author": Ebook.author,
    "genre": Ebook.genre,
    "uploader": Ebook.uploader_username,
}


def list_all(db: Session) -> list[Ebook]:
    return db.query(Ebook).order_by(Ebook.id).all()


def search(db: Session, field: SearchField, value: str) -> list[Ebook]:
    """
    Return eBooks whose field equals value. Text fields compare case-insensitively;
    'uploader' matches the uploader snapshot username.
    """
    query = db.query(Ebook)
    if field == "year":
        try:
            year = int(value)
        except (TypeError, ValueError) as e:
            raise InvalidInput("Year must be an integer") from e
        query = query.filter(Ebook.publication_year == year)
    else:
        column = _TEXT_COLUMNS[field]
        query = query.filter(func.lower(column) == value.strip().lower())
    return query.order_by(Ebook.id).all()


def list_uploaded_by(db: Session, user_id: int) -> list[Ebook]:
    """The caller's uploads, in upload order."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found.")
    return list(user.uploaded_books)


def add_ebook(db: Session, user_id: int, body: EbookCreate) -> Ebook:
    """
    Save the entry, resolve the uploader, then attach the uploader snapshot and
    ownership reference. All three steps share one transaction; a failure in a
    later step rolls back the saved entry.
    """
    entry = Ebook(
        title=body.title.strip(),
        author=body.author.strip(),
        genre=body.genre.strip(),
        publication_year=body.publication_year,
        content=body.content,
    )
    try:
        db.add(entry)
        db.flush()

        uploader = db.get(User, user_id)
        if uploader is None:
            raise NotFound("Uploader account no longer exists.")

        entry.uploader_id = uploader.id
        entry.uploader_username = uploader.username
        entry.uploader_email = uploader.email
        uploader.uploaded_books.append(entry)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(entry)
    logger.info("eBook uploaded", extra={"ebook_id": entry.id, "user_id": user_id})
    return entry


def get_ebook(db: Session, ebook_id: int) -> Ebook:
    ebook = db.get(Ebook, ebook_id)
    if ebook is None:
        raise NotFound("eBook not found.")
    return ebook


def _ensure_can_modify(db: Session, user_id: int, ebook: Ebook) -> User:
    """Only the recorded uploader or an admin may change or remove an eBook."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found.")
    if ebook.uploader_id != user.id and not user.is_admin:
        logger.warning(
            "eBook change refused: not uploader or admin",
            extra={"ebook_id": ebook.id, "user_id": user_id},
        )
        raise Forbidden("Only the uploader or an admin can modify this eBook.")
    return user


def edit_ebook(db: Session, user_id: int, body: EbookEdit) -> Ebook:
    """Edit title, author, genre and year. Content is immutable after upload."""
    ebook = get_ebook(db, body.book_id)
    _ensure_can_modify(db, user_id, ebook)

    new_title = (body.new_title or "").strip()
    new_author = (body.new_author or "").strip()
    new_genre = (body.new_genre or "").strip()
    if not (new_title or new_author or new_genre or body.new_year is not None):
        raise InvalidInput("No changes submitted. Provide newTitle, newAuthor, newGenre or newYear.")

    if new_title:
        ebook.title = new_title
    if new_author:
        ebook.author = new_author
    if new_genre:
        ebook.genre = new_genre
    if body.new_year is not None:
        ebook.publication_year = body.new_year
    db.commit()
    db.refresh(ebook)
    logger.info("eBook edited", extra={"ebook_id": ebook.id, "user_id": user_id})
    return ebook


def delete_ebook(db: Session, user_id: int, ebook_id: int) -> None:
    """Remove the eBook from its owner's uploaded list, then delete it."""
    ebook = get_ebook(db, ebook_id)
    _ensure_can_modify(db, user_id, ebook)

    if ebook.uploader_id is not None:
        owner = db.get(User, ebook.uploader_id)
        if owner is not None and ebook in owner.uploaded_books:
            owner.uploaded_books.remove(ebook)
    db.delete(ebook)
    db.commit()
    logger.info("eBook deleted", extra={"ebook_id": ebook_id, "user_id": user_id})
