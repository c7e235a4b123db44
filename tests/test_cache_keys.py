import itertools

from chronolens.core.cache_keys import build_cache_key, key_filename, sanitize_key
from chronolens.core.models import THIS_WEEK, CacheKey, Category, ViewType


def test_build_cache_key_format():
    key = build_cache_key("2024-03-01", Category.SCIENCE, ViewType.TODAY)
    assert key == "chronolens_events_today_Science_2024-03-01"


def test_build_cache_key_accepts_plain_strings():
    assert build_cache_key("2024-03-01", "Science", "today") == build_cache_key(
        "2024-03-01", Category.SCIENCE, ViewType.TODAY
    )


def test_build_cache_key_is_deterministic():
    keys = {build_cache_key(THIS_WEEK, Category.ART, ViewType.WEEK) for _ in range(10)}
    assert keys == {"chronolens_events_week_Art_This Week"}


def test_distinct_triples_give_distinct_keys():
    dates = ["2024-03-01", "2024-03-02", "2023-03-01", THIS_WEEK, "This_Week", "Art_2024"]
    triples = list(itertools.product(dates, Category, ViewType))
    keys = {build_cache_key(d, c, v) for d, c, v in triples}
    assert len(keys) == len(triples)


def test_date_is_used_verbatim():
    assert build_cache_key("not a date", Category.ART, ViewType.TODAY).endswith("_not a date")


def test_cache_key_value_object():
    key = CacheKey(date="2024-03-01", category="Politics", view_type="week")
    assert str(key) == "chronolens_events_week_Politics_2024-03-01"
    assert key == CacheKey(date="2024-03-01", category=Category.POLITICS, view_type=ViewType.WEEK)


def test_sanitize_key_replaces_unsafe_characters():
    assert sanitize_key("chronolens_events_week_Art_This Week") == "chronolens_events_week_Art_This_Week"
    assert sanitize_key("a/b\\c..d") == "a_b_c__d"


def test_sanitize_key_keeps_allowed_characters():
    key = "chronolens_events_today_Science_2024-03-01:x"
    assert sanitize_key(key) == key


def test_key_filename_is_plain_for_safe_keys():
    key = "chronolens_events_today_Science_2024-03-01"
    assert key_filename(key) == key


def test_key_filename_tells_apart_keys_that_sanitize_alike():
    slashed = key_filename("chronolens_events_today_Science_2024/03/01")
    underscored = key_filename("chronolens_events_today_Science_2024_03_01")
    assert slashed != underscored
    assert slashed.startswith("chronolens_events_today_Science_2024_03_01-")
    assert key_filename("chronolens_events_today_Science_2024/03/01") == slashed
