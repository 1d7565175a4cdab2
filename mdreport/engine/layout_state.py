"""Layout cursor and page state for a single render."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class HeadingMark:
    """Where a heading was placed: its top y and its page."""

    y: float
    page: int


@dataclass(slots=True)
class LayoutState:
    """Mutable cursor and heading bookkeeping owned by one render.

    ``last_level2`` is never cleared by a page break. It only matters while
    its page equals ``current_page``; use :meth:`level2_on_current_page` to
    read it.
    """

    cursor_y: float
    current_page: int = 1
    last_heading_level: int = 0
    last_level2: Optional[HeadingMark] = None

    @classmethod
    def fresh(cls, top_margin: float) -> "LayoutState":
        return cls(cursor_y=top_margin)

    @property
    def follows_heading(self) -> bool:
        return self.last_heading_level > 0

    def position_fraction(self, page_height: float) -> float:
        if page_height <= 0:
            return 0.0
        return self.cursor_y / page_height

    def remaining_space(self, page_height: float, bottom_margin: float) -> float:
        return page_height - self.cursor_y - bottom_margin

    def level2_on_current_page(self) -> Optional[HeadingMark]:
        mark = self.last_level2
        if mark is None or mark.page != self.current_page:
            return None
        return mark

    def record_heading(self, level: int) -> None:
        """Record a heading about to be drawn at the current cursor."""
        if level == 2:
            self.last_level2 = HeadingMark(y=self.cursor_y, page=self.current_page)

    def finish_heading(self, level: int) -> None:
        self.last_heading_level = level

    def clear_heading(self) -> None:
        self.last_heading_level = 0

    def start_page(self, top_margin: float) -> None:
        self.current_page += 1
        self.cursor_y = top_margin
