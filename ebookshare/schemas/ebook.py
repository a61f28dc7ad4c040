"""Request/response schemas for eBook endpoints. Wire names follow the public API (camelCase)."""

from pydantic import BaseModel, ConfigDict, Field

from ebookshare.models import Ebook

NO_MATCHES_MESSAGE = "Sorry, no matches found."


class UploaderSnapshot(BaseModel):
    """Uploader identity as it was when the eBook was uploaded."""

    id: int | None = None
    username: str | None = None
    email: str | None = None


class EbookOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    author: str
    genre: str
    publication_year: int = Field(..., alias="publicationYear")
    content: str
    uploader: UploaderSnapshot

    @classmethod
    def from_model(cls, ebook: Ebook) -> "EbookOut":
        return cls(
            id=ebook.id,
            title=ebook.title,
            author=ebook.author,
            genre=ebook.genre,
            publication_year=ebook.publication_year,
            content=ebook.content,
            uploader=UploaderSnapshot(
                id=ebook.uploader_id,
                username=ebook.uploader_username,
                email=ebook.uploader_email,
            ),
        )


class EbookCreate(BaseModel):
    """Body for POST /add/ebook."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=512)
    author: str = Field(..., min_length=1, max_length=512)
    genre: str = Field(..., min_length=1, max_length=255)
    publication_year: int = Field(..., alias="publicationYear")
    content: str = Field(..., min_length=1)


class EbookEdit(BaseModel):
    """Body for PUT /edit/ebook. Content cannot be changed."""

    model_config = ConfigDict(populate_by_name=True)

    book_id: int = Field(..., alias="bookID")
    new_title: str | None = Field(default=None, alias="newTitle", max_length=512)
    new_author: str | None = Field(default=None, alias="newAuthor", max_length=512)
    new_genre: str | None = Field(default=None, alias="newGenre", max_length=255)
    new_year: int | None = Field(default=None, alias="newYear")


class EbookDelete(BaseModel):
    """Body for DELETE /delete/ebook."""

    model_config = ConfigDict(populate_by_name=True)

    ebook_id: int = Field(..., alias="_id")


class EbookListResponse(BaseModel):
    """List of eBooks, or the no-matches message when a search finds nothing."""

    ebooks: list[EbookOut] | str


class EbookAddedResponse(BaseModel):
    message: str
    info: EbookOut
