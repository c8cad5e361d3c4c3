"""Tests for data contracts."""

import json
from datetime import date
from pathlib import Path

import pytest

from steam_price_notifier.contracts import (
    DigestEntry,
    NotionPage,
    NotionWishlistRow,
    SteamAppDetailsEntry,
    SteamGameDetails,
    SteamWishlistResponse,
    build_digest_messages,
    build_error_message,
    normalize_price,
    normalize_release_date,
)
from steam_price_notifier.contracts.discord import DIGEST_HEADER
from steam_price_notifier.errors import DecodeError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class TestNormalizePrice:
    """Tests for Steam price normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("100000", 1000),
            ("449000", 4490),
            ("199", 1),
            ("99", 0),
            ("0", 0),
            ("9223372036854775807", 92233720368547758),
        ],
    )
    def test_drops_fraction_digits(self, raw: str, expected: int) -> None:
        """Test the two implicit fraction digits are floored away."""
        assert normalize_price(raw) == expected

    def test_overflow(self) -> None:
        """Test a value beyond the 64-bit range is rejected."""
        with pytest.raises(DecodeError):
            normalize_price("9223372036854775808")

    @pytest.mark.parametrize("raw", ["", "12.5", "abc", "1_000"])
    def test_not_an_integer(self, raw: str) -> None:
        """Test non-integer strings are rejected."""
        with pytest.raises(DecodeError):
            normalize_price(raw)


class TestNormalizeReleaseDate:
    """Tests for Steam release date normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("11 Nov, 2021", date(2021, 11, 11)),
            ("2 Jan, 2006", date(2006, 1, 2)),
            ("01 Jan, 2021", date(2021, 1, 1)),
        ],
    )
    def test_parses_store_format(self, raw: str, expected: date) -> None:
        """Test day-month-year store dates are parsed."""
        assert normalize_release_date(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["To be announced", "2025", "Q3 2025", "2024-13-32", "", "31 Feb, 2024", "1 Foo, 2024"],
    )
    def test_unknown_dates(self, raw: str) -> None:
        """Test unparseable dates become unknown instead of failing."""
        assert normalize_release_date(raw) is None


class TestSteamContracts:
    """Tests for Steam response contracts."""

    def test_wishlist_app_ids(self) -> None:
        """Test wishlist items are reduced to app IDs."""
        raw = json.loads((FIXTURES_DIR / "steam_wishlist_response.json").read_text())
        wishlist = SteamWishlistResponse.model_validate(raw)

        assert wishlist.app_ids == [1091500, 570]

    def test_empty_wishlist(self) -> None:
        """Test Steam's empty response object."""
        wishlist = SteamWishlistResponse.model_validate({"response": {}})

        assert wishlist.app_ids == []

    def test_details_from_entry(self) -> None:
        """Test app details entry conversion."""
        raw = json.loads((FIXTURES_DIR / "steam_app_details_response.json").read_text())
        entry = SteamAppDetailsEntry.model_validate(raw["1091500"])
        details = SteamGameDetails.from_entry(1091500, entry)

        assert details.title == "Cyberpunk 2077"
        assert details.current_price_raw == "449000"
        assert details.current_price == 4490
        assert details.release_date == date(2020, 12, 10)

    def test_details_without_price(self) -> None:
        """Test games that are not on sale have no current price."""
        entry = SteamAppDetailsEntry.model_validate(
            {"success": True, "data": {"name": "Soon", "release_date": {"date": "To be announced"}}}
        )
        details = SteamGameDetails.from_entry(2, entry)

        assert details.current_price_raw is None
        assert details.current_price is None
        assert details.release_date is None

    def test_details_missing_name(self) -> None:
        """Test a missing title is a validation error."""
        with pytest.raises(ValueError):
            SteamAppDetailsEntry.model_validate(
                {"data": {"release_date": {"date": "1 Jan, 2020"}}}
            )


class TestNotionWishlistRow:
    """Tests for NotionWishlistRow contract."""

    def test_from_page(self) -> None:
        """Test decoding a database page."""
        raw = json.loads((FIXTURES_DIR / "notion_page.json").read_text())
        row = NotionWishlistRow.from_page(NotionPage.model_validate(raw))

        assert row.page_id == "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"
        assert row.app_id == "1091500"
        assert row.title == "Cyberpunk 2077"
        assert row.current_price == 8980
        assert row.lowest_price == 4490
        assert row.release_date == date(2020, 12, 10)

    def test_from_page_empty_properties(self) -> None:
        """Test empty numbers and dates decode as None."""
        page = NotionPage.model_validate(
            {
                "id": "p1",
                "properties": {
                    "App ID": {"title": [{"text": {"content": "7"}}]},
                    "Name": {"rich_text": []},
                    "Current Price": {"number": None},
                    "Lowest Price": {"number": None},
                    "Release Date": {"date": None},
                },
            }
        )
        row = NotionWishlistRow.from_page(page)

        assert row.app_id == "7"
        assert row.title == ""
        assert row.current_price is None
        assert row.lowest_price is None
        assert row.release_date is None

    def test_from_page_datetime_release(self) -> None:
        """Test a release date entered with a time keeps its calendar day."""
        raw = json.loads((FIXTURES_DIR / "notion_page.json").read_text())
        raw["properties"]["Release Date"]["date"]["start"] = "2021-01-01T10:00:00.000+09:00"

        row = NotionWishlistRow.from_page(NotionPage.model_validate(raw))

        assert row.release_date == date(2021, 1, 1)

    def test_from_page_invalid_release(self) -> None:
        """Test a malformed date with a time part is still a validation error."""
        raw = json.loads((FIXTURES_DIR / "notion_page.json").read_text())
        raw["properties"]["Release Date"]["date"]["start"] = "2021-13-01T10:00:00"

        with pytest.raises(ValueError):
            NotionPage.model_validate(raw)

    def test_properties_payload(self) -> None:
        """Test the property envelope sent to Notion."""
        row = NotionWishlistRow(
            app_id="1",
            title="Title1",
            current_price=1000,
            lowest_price=None,
            release_date=date(2021, 1, 1),
        )

        assert row.properties_payload() == {
            "App ID": {"title": [{"text": {"content": "1"}}]},
            "Name": {"rich_text": [{"text": {"content": "Title1"}}]},
            "Current Price": {"number": 1000},
            "Lowest Price": {"number": None},
            "Release Date": {"date": {"start": "2021-01-01"}},
        }

    def test_properties_payload_clears_unknown_date(self) -> None:
        """Test an unknown release date is sent as an explicit null."""
        row = NotionWishlistRow(app_id="2", title="Title2")

        assert row.properties_payload()["Release Date"] == {"date": None}


class TestDigestMessages:
    """Tests for Discord digest layout."""

    def _digest(self, count: int) -> dict[int, DigestEntry]:
        return {
            app_id: DigestEntry(
                title=f"Game {app_id:02d}",
                current_price=app_id * 10,
                lowest_price=app_id * 20,
            )
            for app_id in range(count, 0, -1)
        }

    def test_line_format(self) -> None:
        """Test a single entry renders with the fixed template."""
        entry = DigestEntry(title="Title1", current_price=1000, lowest_price=1500)

        assert entry.render() == (
            "- Title: **Title1**  |  Current Price: **1000 (JPY)**"
            "  |  Lowest Price: **1500 (JPY)**"
        )

    def test_chunks_of_ten(self) -> None:
        """Test 23 entries split into 10, 10 and 3 lines."""
        messages = build_digest_messages(self._digest(23))

        line_counts = [len(m.content.split("\n")) - 1 for m in messages]
        assert line_counts == [10, 10, 3]
        assert all(m.content.split("\n")[0] == DIGEST_HEADER for m in messages)

    def test_sorted_by_title(self) -> None:
        """Test entries are ordered by title across chunks."""
        messages = build_digest_messages(self._digest(23))

        lines = [line for m in messages for line in m.content.split("\n")[1:]]
        titles = [line.split("**")[1] for line in lines]
        assert titles == sorted(titles)
        assert titles[0] == "Game 01"
        assert titles[-1] == "Game 23"

    def test_ordinal_ordering(self) -> None:
        """Test titles compare by code point, not case-insensitively."""
        digest = {
            1: DigestEntry(title="beta", current_price=1, lowest_price=2),
            2: DigestEntry(title="Alpha", current_price=1, lowest_price=2),
            3: DigestEntry(title="Zeta", current_price=1, lowest_price=2),
        }
        lines = build_digest_messages(digest)[0].content.split("\n")[1:]

        assert [line.split("**")[1] for line in lines] == ["Alpha", "Zeta", "beta"]

    def test_empty_digest(self) -> None:
        """Test an empty digest produces no messages."""
        assert build_digest_messages({}) == []

    def test_error_message(self) -> None:
        """Test error report layout and truncation."""
        assert build_error_message(RuntimeError("boom")).content == (
            "## An error occurred:\n- boom"
        )
        long_message = build_error_message(RuntimeError("x" * 5000))
        assert len(long_message.content) == 2000
