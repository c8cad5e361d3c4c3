"""
Data contracts and message layout for Discord webhooks.
"""

from collections.abc import Mapping

from pydantic import BaseModel, Field

DIGEST_HEADER = "## The recommended video games to buy now are as follows:"
DIGEST_LINE_TEMPLATE = (
    "- Title: **{title}**  |  Current Price: **{current_price} (JPY)**"
    "  |  Lowest Price: **{lowest_price} (JPY)**"
)
ERROR_TEMPLATE = "## An error occurred:\n- {error}"

# Discord caps a message at 2000 characters; ten games stay well below it.
MAX_LINES_PER_MESSAGE = 10
MAX_CONTENT_LENGTH = 2000


class DigestEntry(BaseModel):
    """A game whose current price dropped below its recorded lowest price."""

    title: str
    current_price: int = Field(..., ge=0)
    lowest_price: int = Field(..., ge=0, description="Lowest price before this run")

    def render(self) -> str:
        return DIGEST_LINE_TEMPLATE.format(
            title=self.title,
            current_price=self.current_price,
            lowest_price=self.lowest_price,
        )


class DiscordMessage(BaseModel):
    """Body of a webhook execution request."""

    content: str


def build_digest_messages(
    digest: Mapping[int, DigestEntry],
    *,
    max_lines: int = MAX_LINES_PER_MESSAGE,
) -> list[DiscordMessage]:
    """
    Lay out a digest as webhook messages.

    Entries are sorted by title (ordinal string order, ties broken by
    app ID) and split into chunks of at most ``max_lines`` lines; each
    chunk becomes one message starting with the digest header.
    """
    ordered = sorted(digest.items(), key=lambda item: (item[1].title, item[0]))
    lines = [entry.render() for _, entry in ordered]
    return [
        DiscordMessage(content="\n".join([DIGEST_HEADER, *lines[start : start + max_lines]]))
        for start in range(0, len(lines), max_lines)
    ]


def build_error_message(error: BaseException) -> DiscordMessage:
    """Format an error report, truncated to Discord's length limit."""
    content = ERROR_TEMPLATE.format(error=str(error) or type(error).__name__)
    if len(content) > MAX_CONTENT_LENGTH:
        content = content[: MAX_CONTENT_LENGTH - 3] + "..."
    return DiscordMessage(content=content)
