"""eBook endpoints: list, search, upload, metadata edit and delete. All require a bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebookshare.api.deps import get_current_identity
from ebookshare.core.database import get_db
from ebookshare.models import Ebook
from ebookshare.schemas.auth import Identity, MessageResponse
from ebookshare.schemas.ebook import (
    NO_MATCHES_MESSAGE,
    EbookAddedResponse,
    EbookCreate,
    EbookDelete,
    EbookEdit,
    EbookListResponse,
    EbookOut,
)
from ebookshare.services import ebooks as ebook_service
from ebookshare.services.ebooks import SearchField

router = APIRouter()

DbSession = Annotated[Session, Depends(get_db)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def _to_list(rows: list[Ebook]) -> EbookListResponse:
    return EbookListResponse(ebooks=[EbookOut.from_model(row) for row in rows])


def _search_response(db: Session, field: SearchField, value: str) -> EbookListResponse:
    """Zero matches is not an error: 200 with an explanatory message."""
    rows = ebook_service.search(db, field, value)
    if not rows:
        return EbookListResponse(ebooks=NO_MATCHES_MESSAGE)
    return _to_list(rows)


@router.get("/ebooks", response_model=EbookListResponse)
def get_all_ebooks(db: DbSession, _identity: CurrentIdentity) -> EbookListResponse:
    """Return every eBook."""
    return _to_list(ebook_service.list_all(db))


@router.get("/ebooks/youruploads", response_model=EbookListResponse)
def get_your_uploads(db: DbSession, identity: CurrentIdentity) -> EbookListResponse:
    """Return the eBooks uploaded by the caller (user id from the token), in upload order."""
    return _to_list(ebook_service.list_uploaded_by(db, identity.id))


@router.get("/ebooks/title/{title}", response_model=EbookListResponse)
def get_ebooks_by_title(title: str, db: DbSession, _identity: CurrentIdentity) -> EbookListResponse:
    return _search_response(db, "title", title)


@router.get("/ebooks/author/{author}", response_model=EbookListResponse)
def get_ebooks_by_author(author: str, db: DbSession, _identity: CurrentIdentity) -> EbookListResponse:
    return _search_response(db, "author", author)


@router.get("/ebooks/genre/{genre}", response_model=EbookListResponse)
def get_ebooks_by_genre(genre: str, db: DbSession, _identity: CurrentIdentity) -> EbookListResponse:
    return _search_response(db, "genre", genre)


@router.get("/ebooks/year/{year}", response_model=EbookListResponse)
def get_ebooks_by_year(year: str, db: DbSession, _identity: CurrentIdentity) -> EbookListResponse:
    return _search_response(db, "year", year)


@router.get("/ebooks/uploader/{uploader}", response_model=EbookListResponse)
def get_ebooks_by_uploader(
    uploader: str, db: DbSession, _identity: CurrentIdentity
) -> EbookListResponse:
    """Match on the uploader username recorded when each eBook was uploaded."""
    return _search_response(db, "uploader", uploader)


@router.post("/add/ebook", response_model=EbookAddedResponse)
def add_ebook(body: EbookCreate, db: DbSession, identity: CurrentIdentity) -> EbookAddedResponse:
    """Upload an eBook. The uploader is the authenticated user."""
    entry = ebook_service.add_ebook(db, identity.id, body)
    return EbookAddedResponse(
        message="eBook added to DB successfully",
        info=EbookOut.from_model(entry),
    )


@router.put("/edit/ebook", response_model=EbookAddedResponse)
def edit_ebook(body: EbookEdit, db: DbSession, identity: CurrentIdentity) -> EbookAddedResponse:
    """Edit title, author, genre or year. Uploader or admin only."""
    entry = ebook_service.edit_ebook(db, identity.id, body)
    return EbookAddedResponse(
        message="eBook edited successfully",
        info=EbookOut.from_model(entry),
    )


@router.delete("/delete/ebook", response_model=MessageResponse)
def delete_ebook(body: EbookDelete, db: DbSession, identity: CurrentIdentity) -> MessageResponse:
    """Delete an eBook. Uploader or admin only."""
    ebook_service.delete_ebook(db, identity.id, body.ebook_id)
    return MessageResponse(message="eBook deleted successfully")
