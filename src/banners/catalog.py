"""Banner formats and the page positions each format may occupy."""
from django.db import models


class Position(models.TextChoices):
    HEADER = "header", "Header"
    SIDEBAR_TOP = "sidebar_top", "Sidebar top"
    SIDEBAR_BOTTOM = "sidebar_bottom", "Sidebar bottom"
    FOOTER = "footer", "Footer"
    CONTENT = "content", "Content"


class BannerFormat(models.TextChoices):
    LEADERBOARD = "728x90", "Leaderboard (728×90)"
    MEDIUM_RECTANGLE = "300x250", "Medium Rectangle (300×250)"


BANNER_FORMATS = {
    BannerFormat.LEADERBOARD.value: {
        "width": 728,
        "height": 90,
        "label": "Leaderboard (728×90)",
        "positions": (Position.HEADER.value, Position.CONTENT.value, Position.FOOTER.value),
    },
    BannerFormat.MEDIUM_RECTANGLE.value: {
        "width": 300,
        "height": 250,
        "label": "Medium Rectangle (300×250)",
        "positions": (Position.SIDEBAR_TOP.value, Position.SIDEBAR_BOTTOM.value),
    },
}

POSITION_LABELS = {
    Position.HEADER.value: "Header: top bar of every page",
    Position.CONTENT.value: "Content: below the thread title, above the posts",
    Position.SIDEBAR_TOP.value: "Sidebar top: right column, upper slot",
    Position.SIDEBAR_BOTTOM.value: "Sidebar bottom: right column, lower slot",
    Position.FOOTER.value: "Footer: bottom of every page",
}

POSITION_DESCRIPTIONS = {
    Position.HEADER.value: "Visible on every page. Maximum exposure.",
    Position.CONTENT.value: "Visible in threads between the title and the replies. High engagement.",
    Position.SIDEBAR_TOP.value: "Desktop only, right column, upper slot.",
    Position.SIDEBAR_BOTTOM.value: "Desktop only, right column, lower slot.",
    Position.FOOTER.value: "Visible at the end of every page. Complementary.",
}

POSITION_VISIBILITY = {
    Position.HEADER.value: {"pc": True, "mobile": True},
    Position.CONTENT.value: {"pc": True, "mobile": True},
    Position.SIDEBAR_TOP.value: {"pc": True, "mobile": False},
    Position.SIDEBAR_BOTTOM.value: {"pc": True, "mobile": False},
    Position.FOOTER.value: {"pc": True, "mobile": True},
}


def is_position_allowed(banner_format, position) -> bool:
    spec = BANNER_FORMATS.get(str(banner_format))
    return bool(spec) and str(position) in spec["positions"]


def get_format_for_position(position) -> str:
    for fmt, spec in BANNER_FORMATS.items():
        if str(position) in spec["positions"]:
            return fmt
    raise ValueError(f"Unknown banner position: {position!r}")


def get_dimensions_for_format(banner_format) -> tuple[int, int]:
    spec = BANNER_FORMATS[str(banner_format)]
    return spec["width"], spec["height"]


def catalog_items():
    """Flattened catalog for API consumers."""
    return [
        {
            "format": fmt,
            "width": spec["width"],
            "height": spec["height"],
            "label": spec["label"],
            "positions": [
                {
                    "position": pos,
                    "label": POSITION_LABELS[pos],
                    "description": POSITION_DESCRIPTIONS[pos],
                    "visibility": POSITION_VISIBILITY[pos],
                }
                for pos in spec["positions"]
            ],
        }
        for fmt, spec in BANNER_FORMATS.items()
    ]
