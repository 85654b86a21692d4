# Fuzzmenu — (c) 2025 rtj.dev LLC — MIT Licensed
"""Color palette and Rich theme used for console output."""
from rich.theme import Theme


class OneColors:
    """A subset of the One Dark palette as Rich style strings."""

    COMMENT_GREY = "#5C6370"
    DARK_RED = "#BE5046"
    GREEN = "#98C379"
    BLUE_b = "bold #61AFEF"
    MAGENTA = "#C678DD"


def get_theme() -> Theme:
    """Rich theme with named styles for menu previews and errors."""
    return Theme(
        {
            "fuzzmenu.menu": OneColors.BLUE_b,
            "fuzzmenu.program": OneColors.GREEN,
            "fuzzmenu.icon": OneColors.MAGENTA,
            "fuzzmenu.dim": OneColors.COMMENT_GREY,
            "fuzzmenu.error": f"bold {OneColors.DARK_RED}",
        }
    )
