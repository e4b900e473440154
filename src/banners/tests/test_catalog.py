import pytest

from src.banners.catalog import (
    BannerFormat, Position, catalog_items,
    get_dimensions_for_format, get_format_for_position, is_position_allowed,
)


def test_leaderboard_positions():
    for pos in ("header", "content", "footer"):
        assert is_position_allowed("728x90", pos)
        assert not is_position_allowed("300x250", pos)


def test_medium_rectangle_positions():
    for pos in ("sidebar_top", "sidebar_bottom"):
        assert is_position_allowed("300x250", pos)
        assert not is_position_allowed("728x90", pos)


def test_enum_members_and_strings_are_interchangeable():
    assert is_position_allowed(BannerFormat.LEADERBOARD, Position.HEADER)
    assert get_format_for_position(Position.SIDEBAR_TOP) == "300x250"


def test_unknown_values():
    assert not is_position_allowed("120x600", "header")
    assert not is_position_allowed("728x90", "popup")
    with pytest.raises(ValueError):
        get_format_for_position("popup")


def test_dimensions():
    assert get_dimensions_for_format("728x90") == (728, 90)
    assert get_dimensions_for_format(BannerFormat.MEDIUM_RECTANGLE) == (300, 250)


def test_catalog_items_cover_every_position_once():
    items = catalog_items()
    positions = [p["position"] for item in items for p in item["positions"]]
    assert sorted(positions) == sorted(Position.values)
    sidebar = next(p for item in items for p in item["positions"] if p["position"] == "sidebar_top")
    assert sidebar["visibility"] == {"pc": True, "mobile": False}
