"""Request/response schemas for books, including the optional cover image."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bookstore.schemas.author import AuthorRead
from bookstore.services.assets import check_asset_name, decode_content

TITLE_MAX_LENGTH = 255
ISBN_MAX_LENGTH = 32
SUMMARY_MAX_LENGTH = 10_000
IMAGE_NAME_MAX_LENGTH = 255
MAX_IMAGE_FILE_BYTES = 5 * 1024 * 1024  # 5 MB
# Base64 grows content by 4/3, rounded up to whole 4-character groups.
FILE_MAX_LENGTH = 4 * ((MAX_IMAGE_FILE_BYTES + 2) // 3)


class BookBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    year: int | None = Field(default=None, ge=0, le=9999)
    isbn: str = Field(..., min_length=1, max_length=ISBN_MAX_LENGTH)
    summary: str | None = Field(default=None, max_length=SUMMARY_MAX_LENGTH)
    image: str | None = Field(
        default=None,
        max_length=IMAGE_NAME_MAX_LENGTH,
        description="File name of the cover image in the upload directory.",
    )
    price: float | None = Field(default=None, ge=0)
    author_id: int | None = None


class BookWrite(BookBase):
    """Fields shared by create and update bodies."""

    file: str | None = Field(
        default=None,
        max_length=FILE_MAX_LENGTH,
        description="Base64-encoded image content to store under `image` (at most 5 MB decoded).",
    )

    @field_validator("image")
    @classmethod
    def validate_image(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return v
        return check_asset_name(v)

    @field_validator("file")
    @classmethod
    def validate_file(cls, v: str | None) -> str | None:
        if v:
            decode_content(v)
        return v

    @model_validator(mode="after")
    def file_requires_image(self) -> "BookWrite":
        if self.file and not self.image:
            raise ValueError("`image` is required when `file` is sent.")
        return self

    def record_fields(self) -> dict:
        """Column values for the books table (without the image content)."""
        return self.model_dump(exclude={"id", "file"})


class BookCreate(BookWrite):
    """Body of POST /books."""


class BookUpdate(BookWrite):
    """Body of PUT /books/{id}; id must match the path."""

    id: int


class BookRead(BookBase):
    """Book as returned by the API; file carries the cover image, base64-encoded."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    author: AuthorRead | None = None
    file: str | None = None
