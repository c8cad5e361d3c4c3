"""
Data contracts for the Notion wishlist database.

Pages carry their values inside Notion property envelopes keyed by
the database's column names. The envelope models here are used in
both directions: validating query results and serializing the
bodies of create/update requests.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

APP_ID_PROPERTY = "App ID"
NAME_PROPERTY = "Name"
CURRENT_PRICE_PROPERTY = "Current Price"
LOWEST_PRICE_PROPERTY = "Lowest Price"
RELEASE_DATE_PROPERTY = "Release Date"


class NotionText(BaseModel):
    """Text payload of a rich text item."""

    content: str


class NotionRichText(BaseModel):
    """A rich text item. Mentions and equations have no ``text``."""

    text: NotionText | None = None
    plain_text: str | None = Field(default=None, exclude=True)

    @classmethod
    def of(cls, content: str) -> "NotionRichText":
        return cls(text=NotionText(content=content))

    @property
    def content(self) -> str:
        if self.text is not None:
            return self.text.content
        return self.plain_text or ""


class NotionTitleProperty(BaseModel):
    title: list[NotionRichText] = Field(default_factory=list)


class NotionRichTextProperty(BaseModel):
    rich_text: list[NotionRichText] = Field(default_factory=list)


class NotionNumberProperty(BaseModel):
    number: int | None = None


class NotionDateValue(BaseModel):
    start: date

    @field_validator("start", mode="before")
    @classmethod
    def drop_time(cls, v: Any) -> Any:
        """Dates entered with a time of day keep only their calendar day."""
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v).date()
        return v


class NotionDateProperty(BaseModel):
    date: NotionDateValue | None = None


def _join(items: list[NotionRichText]) -> str:
    return "".join(item.content for item in items)


class NotionPageProperties(BaseModel):
    """Properties of a wishlist page, keyed by column name."""

    model_config = ConfigDict(populate_by_name=True)

    app_id: NotionTitleProperty = Field(alias=APP_ID_PROPERTY)
    name: NotionRichTextProperty = Field(
        default_factory=NotionRichTextProperty, alias=NAME_PROPERTY
    )
    current_price: NotionNumberProperty = Field(
        default_factory=NotionNumberProperty, alias=CURRENT_PRICE_PROPERTY
    )
    lowest_price: NotionNumberProperty = Field(
        default_factory=NotionNumberProperty, alias=LOWEST_PRICE_PROPERTY
    )
    release_date: NotionDateProperty = Field(
        default_factory=NotionDateProperty, alias=RELEASE_DATE_PROPERTY
    )


class NotionPage(BaseModel):
    """A page object as returned by the database query endpoint."""

    id: str
    properties: NotionPageProperties


class NotionQueryResponse(BaseModel):
    """One page of database query results."""

    results: list[NotionPage] = Field(default_factory=list)
    next_cursor: str | None = None
    has_more: bool = False


class NotionWishlistRow(BaseModel):
    """
    A wishlist row in domain terms.

    ``app_id`` is kept as the stored text; it is only parsed when rows
    are indexed for diffing, where a bad value aborts the run.
    """

    page_id: str | None = None
    app_id: str
    title: str = ""
    current_price: int | None = None
    lowest_price: int | None = None
    release_date: date | None = None

    @classmethod
    def from_page(cls, page: NotionPage) -> "NotionWishlistRow":
        props = page.properties
        release = props.release_date.date
        return cls(
            page_id=page.id,
            app_id=_join(props.app_id.title),
            title=_join(props.name.rich_text),
            current_price=props.current_price.number,
            lowest_price=props.lowest_price.number,
            release_date=release.start if release is not None else None,
        )

    def to_properties(self) -> NotionPageProperties:
        return NotionPageProperties(
            app_id=NotionTitleProperty(title=[NotionRichText.of(self.app_id)]),
            name=NotionRichTextProperty(rich_text=[NotionRichText.of(self.title)]),
            current_price=NotionNumberProperty(number=self.current_price),
            lowest_price=NotionNumberProperty(number=self.lowest_price),
            release_date=NotionDateProperty(
                date=NotionDateValue(start=self.release_date)
                if self.release_date is not None
                else None
            ),
        )

    def properties_payload(self) -> dict[str, Any]:
        """Properties serialized for a create or update request body."""
        return self.to_properties().model_dump(mode="json", by_alias=True)
