"""Unit tests for data models.

Test validation and conversion logic for ListingRow, Article, Config and
the bucketed result.
"""
from datetime import datetime, timezone

import pytest

from arca_digest.lib.errors import ParseError
from arca_digest.models.article import Article
from arca_digest.models.config import DEFAULT_CONFIG, Config, validate_config_value
from arca_digest.models.result import RATE_BANDS, Bucket, BucketedResult, band_for_rate
from conftest import SEOUL, make_row


def make_article(rate: int = 10, **overrides) -> Article:
    values = {
        "title": "테스트 글",
        "url": "/b/test/1?p=1",
        "author": "tester#1234",
        "date": datetime(2024, 3, 10, 12, 0, tzinfo=SEOUL),
        "view": 100,
        "rate": rate,
        "category": "일반",
    }
    values.update(overrides)
    return Article(**values)


class TestListingRow:
    """Test timestamp parsing of raw listing rows."""

    def test_parse_date_with_offset(self):
        """Offsets are converted into the report zone."""
        row = make_row(published="2024-03-10T03:00:00.000Z")
        parsed = row.parse_date(SEOUL)

        assert parsed.tzinfo is SEOUL
        assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2024, 3, 10, 12)

    def test_parse_date_month_follows_zone(self):
        """A UTC timestamp late on the last day belongs to the next month in Seoul."""
        row = make_row(published="2024-02-29T16:00:00Z")
        parsed = row.parse_date(SEOUL)

        assert (parsed.year, parsed.month, parsed.day) == (2024, 3, 1)

    def test_parse_date_naive_uses_zone(self):
        row = make_row(published="2024-03-10T12:00:00")
        parsed = row.parse_date(SEOUL)

        assert parsed.tzinfo is SEOUL
        assert parsed.hour == 12

    def test_parse_date_missing(self):
        with pytest.raises(ParseError) as exc_info:
            make_row(published=None).parse_date(SEOUL)

        assert exc_info.value.error_code == "MISSING_TIMESTAMP"

    def test_parse_date_invalid(self):
        with pytest.raises(ParseError) as exc_info:
            make_row(published="어제").parse_date(SEOUL)

        assert exc_info.value.error_code == "INVALID_TIMESTAMP"


class TestArticleModel:
    """Test Article conversion and helpers."""

    def test_from_row(self):
        article = Article.from_row(make_row(rate="-3", view="1234"), SEOUL)

        assert article.title == "테스트 글"
        assert article.url == "/b/test/1?p=1"
        assert article.author == "tester#1234"
        assert article.view == 1234
        assert article.rate == -3
        assert article.category == "일반"
        assert article.date == datetime(2024, 3, 10, 12, 0, tzinfo=SEOUL)

    def test_from_row_non_numeric_rate(self):
        """Non-numeric counts are rejected instead of becoming zero."""
        with pytest.raises(ParseError) as exc_info:
            Article.from_row(make_row(rate="N/A"), SEOUL)

        assert exc_info.value.error_code == "NOT_A_NUMBER"
        assert exc_info.value.details["field"] == "rate"

    def test_from_row_non_numeric_view(self):
        with pytest.raises(ParseError) as exc_info:
            Article.from_row(make_row(view="1,234"), SEOUL)

        assert exc_info.value.details["field"] == "view"

    def test_from_row_missing_rate(self):
        with pytest.raises(ParseError) as exc_info:
            Article.from_row(make_row(rate=None), SEOUL)

        assert exc_info.value.error_code == "MISSING_FIELD"

    def test_from_row_missing_author(self):
        with pytest.raises(ParseError) as exc_info:
            Article.from_row(make_row(author=None), SEOUL)

        assert exc_info.value.details["field"] == "author"

    def test_from_row_negative_view(self):
        with pytest.raises(ParseError) as exc_info:
            Article.from_row(make_row(view="-1"), SEOUL)

        assert exc_info.value.error_code == "INVALID_FIELD"

    def test_validation_requires_aware_date(self):
        with pytest.raises(ValueError, match="시간대"):
            make_article(date=datetime(2024, 3, 10))

    def test_validation_requires_relative_url(self):
        with pytest.raises(ValueError, match="상대 경로"):
            make_article(url="https://arca.live/b/test/1")

    def test_author_with_tag(self):
        article = make_article(author="tester#1234")

        assert article.author_name == "tester"
        assert article.author_tag == "1234"
        assert article.profile_path() == "/u/@tester/1234"
        assert article.is_anonymous() is False

    def test_author_without_tag(self):
        article = make_article(author="tester")

        assert article.author_name == "tester"
        assert article.author_tag is None
        assert article.profile_path() == "/u/@tester"

    def test_anonymous_author(self):
        article = make_article(author="ㅇㅇ 121.134")

        assert article.is_anonymous() is True

    def test_urls(self):
        article = make_article(url="/b/test/98765?category=%EC%9C%A0%EB%A8%B8&p=2")

        assert article.clean_url == "/b/test/98765"
        assert article.absolute_url("https://arca.live/") == "https://arca.live/b/test/98765"

    def test_to_dict(self):
        data = make_article(rate=42).to_dict()

        assert data["rate"] == 42
        assert data["date"] == "2024-03-10T12:00:00+09:00"


class TestConfigModel:
    """Test Config validation."""

    def test_from_dict_applies_defaults(self, config_data):
        config = Config.from_dict(config_data)

        assert config.target_year == 2024
        assert config.target_month == 3
        assert config.category == ("", "유머")
        assert config.base_url == DEFAULT_CONFIG["base_url"]
        assert config.request_delay == 5.0
        assert config.zone.key == "Asia/Seoul"

    def test_from_dict_missing_required(self, config_data):
        del config_data["slug"]

        with pytest.raises(ValueError, match="slug"):
            Config.from_dict(config_data)

    def test_from_dict_unknown_key(self, config_data):
        config_data["pages"] = 3

        with pytest.raises(ValueError, match="pages"):
            Config.from_dict(config_data)

    @pytest.mark.parametrize("month", [0, 13, "3", 3.0, True])
    def test_invalid_month(self, config_data, month):
        config_data["target_month"] = month

        with pytest.raises(ValueError):
            Config.from_dict(config_data)

    def test_year_must_not_be_bool(self, config_data):
        config_data["target_year"] = True

        with pytest.raises(ValueError, match="target_year"):
            Config.from_dict(config_data)

    def test_category_must_be_list_of_strings(self, config_data):
        config_data["category"] = "유머"
        with pytest.raises(ValueError, match="category"):
            Config.from_dict(config_data)

        config_data["category"] = ["유머", 3]
        with pytest.raises(ValueError, match="category"):
            Config.from_dict(config_data)

    def test_login_requires_credentials(self, config_data):
        config_data["need_login"] = True
        config_data["password"] = ""

        with pytest.raises(ValueError, match="need_login"):
            Config.from_dict(config_data)

    def test_need_login_must_be_bool(self, config_data):
        config_data["need_login"] = "yes"

        with pytest.raises(ValueError, match="need_login"):
            Config.from_dict(config_data)

    def test_unknown_timezone(self, config_data):
        config_data["timezone"] = "Mars/Olympus"

        with pytest.raises(ValueError, match="시간대"):
            Config.from_dict(config_data)

    def test_config_is_frozen(self, config_data):
        config = Config.from_dict(config_data)

        with pytest.raises(AttributeError):
            config.target_month = 4

    def test_to_dict_round_trips_category(self, config_data):
        data = Config.from_dict(config_data).to_dict()

        assert data["category"] == ["", "유머"]
        assert data["output_path"] == "output.html"

    def test_validate_config_value(self):
        validate_config_value("request_delay", 0)
        validate_config_value("base_url", "http://localhost:8080")

        with pytest.raises(ValueError):
            validate_config_value("request_delay", -1)
        with pytest.raises(ValueError):
            validate_config_value("base_url", "arca.live")
        with pytest.raises(ValueError):
            validate_config_value("slug", "test/other")


class TestBucketedResultModel:
    """Test rate bands and the result invariants."""

    @pytest.mark.parametrize(
        "rate, expected",
        [
            (-5, "ten"),
            (0, "ten"),
            (19, "ten"),
            (20, "twenty"),
            (59, "fifty"),
            (99, "ninety"),
            (100, "hundred"),
            (199, "hundred"),
            (200, "high"),
            (10**6, "high"),
        ],
    )
    def test_band_for_rate(self, rate, expected):
        assert band_for_rate(rate).name == expected

    def test_bands_are_contiguous(self):
        for previous, current in zip(RATE_BANDS, RATE_BANDS[1:]):
            assert current.lower == previous.upper + 1

        assert RATE_BANDS[0].lower is None
        assert RATE_BANDS[-1].upper is None

    def test_rejects_total_mismatch(self):
        article = make_article()
        buckets = tuple(
            Bucket(band, (article,) if band.name == "ten" else ()) for band in RATE_BANDS
        )

        with pytest.raises(ValueError, match="total"):
            BucketedResult(title="t", total=2, all=(article,), buckets=buckets)

    def test_rejects_partial_bucket_table(self):
        buckets = tuple(Bucket(band, ()) for band in RATE_BANDS[:-1])

        with pytest.raises(ValueError):
            BucketedResult(title="t", total=0, all=(), buckets=buckets)

    def test_lookup_and_share(self):
        articles = [make_article(rate=r) for r in (1, 2, 250)]
        buckets = tuple(
            Bucket(band, tuple(a for a in articles if band.contains(a.rate))) for band in RATE_BANDS
        )
        result = BucketedResult(title="t", total=3, all=tuple(articles), buckets=buckets)

        assert [a.rate for a in result["ten"]] == [1, 2]
        assert result.share(buckets[0]) == 66
        assert result.share(buckets[-1]) == 33
        with pytest.raises(KeyError):
            result["all"]

    def test_share_of_empty_result(self):
        buckets = tuple(Bucket(band, ()) for band in RATE_BANDS)
        result = BucketedResult(title="t", total=0, all=(), buckets=buckets)

        assert result.share(buckets[0]) == 0

    def test_timezone_aware_article_dates_compare(self):
        utc_date = datetime(2024, 3, 10, 3, 0, tzinfo=timezone.utc)

        assert make_article(date=utc_date).date == datetime(2024, 3, 10, 12, 0, tzinfo=SEOUL)
