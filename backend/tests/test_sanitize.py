import pytest

from boostkit.models.enums import OrderBy
from boostkit.models.enums import SortOrder
from boostkit.utils.sanitize import coerce_int
from boostkit.utils.sanitize import decode_settings
from boostkit.utils.sanitize import encode_settings
from boostkit.utils.sanitize import sanitize_key
from boostkit.utils.sanitize import sanitize_settings
from boostkit.utils.sanitize import sanitize_status
from boostkit.utils.sanitize import sanitize_text_field


def test_sanitize_key():
    assert sanitize_key("Max Items!") == "maxitems"
    assert sanitize_key("show_on-cart") == "show_on-cart"
    assert sanitize_key(3) == "3"


def test_sanitize_text_field_strips_markup():
    raw = "<b>Hi</b>  there\n\t<script>alert('x')</script>%3Cfoo"

    assert sanitize_text_field(raw) == "Hi there foo"
    assert sanitize_text_field(None) == ""
    assert sanitize_text_field(12) == "12"


def test_sanitize_settings_recurses_and_keeps_scalars():
    settings = {
        "Title": "<em>Deal</em>",
        "enabled": True,
        "count": 3,
        "ratio": 0.5,
        "Nested Block": {"Label": " spaced  out ", "flag": False},
        "items": [1, "<i>two</i>", {"Key": "v"}],
        "missing": None,
    }

    assert sanitize_settings(settings) == {
        "title": "Deal",
        "enabled": True,
        "count": 3,
        "ratio": 0.5,
        "nestedblock": {"label": "spaced out", "flag": False},
        "items": [1, "two", {"key": "v"}],
        "missing": "",
    }


def test_sanitize_settings_does_not_turn_bools_into_ints():
    result = sanitize_settings({"flag": True})

    assert result["flag"] is True


@pytest.mark.parametrize(
    "status, expected",
    [
        ("active", "active"),
        ("inactive", "inactive"),
        ("draft", "draft"),
        ("ACTIVE", "active"),
        ("archived", "active"),
        (None, "active"),
    ],
)
def test_sanitize_status(status, expected):
    assert sanitize_status(status) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5),
        ("7", 7),
        (" 8 ", 8),
        ("2.9", 2),
        (3.7, 3),
        ("abc", 10),
        (None, 10),
        ([], 10),
        ("inf", 10),
        (2**63 - 1, 2**63 - 1),
        (-(2**63), -(2**63)),
        (2**70, 10),
        (-(2**70), 10),
        ("99999999999999999999999", 10),
        (1e300, 10),
    ],
)
def test_coerce_int(value, expected):
    assert coerce_int(value, 10) == expected


def test_decode_settings_boundary():
    assert decode_settings(encode_settings({"a": [1, {"b": "é"}]})) == {"a": [1, {"b": "é"}]}
    assert decode_settings(None) == {}
    assert decode_settings("") == {}
    assert decode_settings("not json") == {}
    assert decode_settings("[1, 2]") == {}


def test_orderby_allow_list():
    assert OrderBy.coerce("name") is OrderBy.NAME
    assert OrderBy.coerce("id; DROP TABLE x") is OrderBy.PRIORITY
    assert OrderBy.coerce("feature_id") is OrderBy.PRIORITY
    assert OrderBy.coerce(None) is OrderBy.PRIORITY


def test_sort_order_coercion():
    assert SortOrder.coerce("desc") is SortOrder.DESC
    assert SortOrder.coerce("DeSc") is SortOrder.DESC
    assert SortOrder.coerce("ASC") is SortOrder.ASC
    assert SortOrder.coerce("sideways") is SortOrder.ASC
    assert SortOrder.coerce(None) is SortOrder.ASC
