"""Page-break decisions shared by every block emitter.

Break decisions use two signals: a conservative estimate of the space a
block needs, and how far down the page the cursor already is (the position
fraction, ``cursor_y / page_height``). Headings need room not only for
themselves but for child content that has not been emitted yet, so pure
space arithmetic is not enough.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .blocks import Block, BlockKind
from .layout_state import LayoutState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BreakRule:
    """Break thresholds for one block kind.

    Args:
        min_space: Estimated space (mm) the block needs below the cursor.
        position_fraction: Break once the cursor is past this fraction of the
            page height. ``None`` disables the position check.
        needs_tight_space: Only apply the position check when the remaining
            space is also below ``min_space * tight_space_factor``.
    """

    min_space: float
    position_fraction: Optional[float] = None
    needs_tight_space: bool = False


# Level 2 reserves the most room: it anticipates a child level-3 section.
HEADING_RULES: Dict[int, BreakRule] = {
    1: BreakRule(min_space=85.0, position_fraction=0.60, needs_tight_space=True),
    2: BreakRule(min_space=110.0, position_fraction=0.40),
    3: BreakRule(min_space=65.0, position_fraction=0.55),
    4: BreakRule(min_space=45.0, position_fraction=0.60),
}

PARAGRAPH_RULE = BreakRule(min_space=24.0)
PARAGRAPH_AFTER_HEADING_RULE = BreakRule(min_space=24.0 + 20.0, position_fraction=0.65)
CODE_RULE = BreakRule(min_space=20.0)
LIST_ITEM_RULE = BreakRule(min_space=10.0)
LIST_ITEM_AFTER_HEADING_RULE = BreakRule(min_space=10.0, position_fraction=0.70)

TIGHT_SPACE_FACTOR = 1.2
FRESH_PAGE_ZONE = 40.0
AFFINITY_PARENT_FRACTION = 0.35
AFFINITY_SPACE_FACTOR = 2.0


@dataclass(slots=True)
class PageBreakPolicy:
    """Decides, per block, between breaking the page and continuing.

    ``top_margin`` anchors the fresh-page zone: while the cursor is within
    ``fresh_page_zone`` mm of it, nothing breaks.
    """

    top_margin: float = 30.0
    heading_rules: Dict[int, BreakRule] = field(default_factory=lambda: dict(HEADING_RULES))
    paragraph_rule: BreakRule = PARAGRAPH_RULE
    paragraph_after_heading_rule: BreakRule = PARAGRAPH_AFTER_HEADING_RULE
    code_rule: BreakRule = CODE_RULE
    list_item_rule: BreakRule = LIST_ITEM_RULE
    list_item_after_heading_rule: BreakRule = LIST_ITEM_AFTER_HEADING_RULE
    tight_space_factor: float = TIGHT_SPACE_FACTOR
    fresh_page_zone: float = FRESH_PAGE_ZONE
    affinity_parent_fraction: float = AFFINITY_PARENT_FRACTION
    affinity_space_factor: float = AFFINITY_SPACE_FACTOR

    def should_break(
        self,
        state: LayoutState,
        block: Block,
        remaining_space: float,
        page_height: float,
    ) -> bool:
        """Return True when ``block`` should start on a new page."""
        if self.on_fresh_page(state):
            return False

        if block.kind is BlockKind.HEADING and self._escalate_for_parent(
            state, block, remaining_space, page_height
        ):
            logger.debug(
                "Level 3 heading on page %d follows a low level 2 heading, breaking",
                state.current_page,
            )
            return True

        rule = self.rule_for(block, follows_heading=state.follows_heading)
        if rule is None:
            return False
        return self._apply(rule, state.position_fraction(page_height), remaining_space)

    def on_fresh_page(self, state: LayoutState) -> bool:
        return state.cursor_y - self.top_margin <= self.fresh_page_zone

    def rule_for(self, block: Block, *, follows_heading: bool = False) -> Optional[BreakRule]:
        kind = block.kind
        if kind is BlockKind.HEADING:
            return self.heading_rule(block.level)
        if kind is BlockKind.PARAGRAPH:
            return self.paragraph_after_heading_rule if follows_heading else self.paragraph_rule
        if kind in (BlockKind.CODE, BlockKind.HIGHLIGHTED_CODE):
            return self.code_rule
        if kind is BlockKind.LIST_ITEM:
            return self.list_item_after_heading_rule if follows_heading else self.list_item_rule
        if kind is BlockKind.IMAGE:
            return BreakRule(min_space=block.height)
        # Thematic breaks and inline code always fit.
        return None

    def heading_rule(self, level: int) -> BreakRule:
        deepest = max(self.heading_rules)
        level = min(max(level, 1), deepest)
        return self.heading_rules[level]

    def _apply(self, rule: BreakRule, fraction: float, remaining_space: float) -> bool:
        if remaining_space < rule.min_space:
            return True
        if rule.position_fraction is None or fraction <= rule.position_fraction:
            return False
        if rule.needs_tight_space:
            return remaining_space < rule.min_space * self.tight_space_factor
        return True

    def _escalate_for_parent(
        self,
        state: LayoutState,
        block: Block,
        remaining_space: float,
        page_height: float,
    ) -> bool:
        # Keeps a low level 2 heading together with its first subsection.
        if block.level != 3 or page_height <= 0:
            return False
        parent = state.level2_on_current_page()
        if parent is None:
            return False
        if parent.y / page_height <= self.affinity_parent_fraction:
            return False
        needed = self.heading_rule(3).min_space * self.affinity_space_factor
        return remaining_space < needed


DEFAULT_POLICY = PageBreakPolicy()


def should_break(
    state: LayoutState,
    block: Block,
    remaining_space: float,
    page_height: float,
    policy: Optional[PageBreakPolicy] = None,
) -> bool:
    """Module-level shortcut for :meth:`PageBreakPolicy.should_break`."""
    return (policy or DEFAULT_POLICY).should_break(state, block, remaining_space, page_height)
