"""Default colours for syntax-highlighted code."""

from typing import Dict, Mapping, Optional, Tuple

RGB = Tuple[int, int, int]

DEFAULT_COLOR: RGB = (0, 0, 0)

DEFAULT_PALETTE: Dict[str, RGB] = {
    "keyword": (0, 0, 255),        # Blue
    "string": (0, 128, 0),         # Green
    "number": (255, 0, 0),         # Red
    "comment": (128, 128, 128),    # Gray
    "function": (0, 0, 128),       # Dark blue
    "class": (0, 100, 200),        # Light blue
    "variable": (139, 69, 19),     # Brown
    "literal": (255, 69, 0),       # Orange red
    "builtin": (0, 100, 0),        # Dark green
    "text": DEFAULT_COLOR,
}


def color_for(category: Optional[str], palette: Optional[Mapping[str, RGB]] = None) -> RGB:
    """Return the RGB colour for a token category, black when unknown."""
    if not category:
        return DEFAULT_COLOR
    table = DEFAULT_PALETTE if palette is None else palette
    return table.get(category.lower(), DEFAULT_COLOR)
