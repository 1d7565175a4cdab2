"""Tests for the block emitters in LayoutFlow."""

import logging

import pytest
from PIL import Image

from mdreport.engine.blocks import Block
from mdreport.engine.layout_flow import BULLET, FlowMetrics, LayoutFlow, list_prefix
from mdreport.highlight.palette import DEFAULT_PALETTE

CONTENT_BOTTOM = 277.0


@pytest.fixture
def flow(surface):
    return LayoutFlow(surface)


def lines(count, word="line"):
    return "\n".join(f"{word} {index}" for index in range(1, count + 1))


class TestEndToEnd:
    def test_short_document_fits_on_one_page(self, surface, flow):
        cursors = [surface.get_cursor()[1]]

        flow.emit(Block.heading(1, "Report"))
        cursors.append(surface.get_cursor()[1])
        flow.emit(Block.paragraph(lines(3)))
        cursors.append(surface.get_cursor()[1])
        flow.emit(Block.code(lines(5, "x =")))
        cursors.append(surface.get_cursor()[1])

        assert surface.page_breaks == 0
        assert flow.page_breaks == 0
        assert flow.blocks_emitted == 3
        assert all(later > earlier for earlier, later in zip(cursors, cursors[1:]))
        # 30 + heading 12 + 3, paragraph 3 * 6 + 4, code 5 * 6 + 3
        assert cursors[-1] == pytest.approx(100.0)

    def test_low_level2_heading_moves_to_next_page_with_its_child(self, surface, flow):
        surface.set_cursor(20.0, 0.85 * 297.0)

        flow.emit_heading(2, "Section")
        flow.emit_heading(3, "Subsection")

        assert surface.page_breaks == 1
        section = surface.find_text("Section")
        subsection = surface.find_text("Subsection")
        assert (section["page"], section["y"]) == (2, 30.0)
        assert subsection["page"] == 2
        assert subsection["y"] == pytest.approx(45.0)

    def test_ordered_list_with_parenthesis_marker(self, surface, flow):
        for ordinal, text in enumerate(["Alpha", "Beta", "Gamma"], start=1):
            flow.emit(Block.list_item(text, ")", ordinal))

        assert surface.texts() == ["1. Alpha", "2. Beta", "3. Gamma"]


class TestHeadings:
    def test_heading_on_fresh_page_has_no_gap_before(self, surface, flow):
        flow.emit_heading(2, "Intro")

        assert surface.find_text("Intro")["y"] == 30.0

    def test_heading_mid_page_gets_gap_before(self, surface, flow):
        surface.set_cursor(20.0, 100.0)

        flow.emit_heading(2, "Section")

        assert surface.find_text("Section")["y"] == pytest.approx(104.0)
        assert surface.get_cursor()[1] == pytest.approx(119.0)

    def test_heading_fonts_by_level(self, surface, flow):
        flow.emit_heading(1, "One")
        flow.emit_heading(6, "Six")

        assert surface.find_text("One")["font"].size == 20.0
        assert surface.find_text("Six")["font"].size == 12.0
        assert surface.find_text("One")["font"].name == "Courier-BoldOblique"

    def test_level3_follows_low_level2_onto_next_page(self, surface, flow):
        surface.set_cursor(20.0, 110.0)

        flow.emit_heading(2, "Parent")
        flow.emit_paragraph(lines(3))
        flow.emit_heading(3, "Child")

        assert surface.find_text("Parent")["page"] == 1
        assert surface.find_text("Child")["page"] == 2

    def test_level3_stays_after_high_level2(self, surface, flow):
        surface.set_cursor(20.0, 70.0)

        flow.emit_heading(2, "Parent")
        flow.emit_paragraph(lines(11))
        flow.emit_heading(3, "Child")

        assert surface.page_breaks == 0
        assert surface.find_text("Child")["y"] == pytest.approx(159.0)


class TestStateClearing:
    @pytest.mark.parametrize(
        "content",
        [
            Block.paragraph("text"),
            Block.code("x = 1"),
            Block.list_item("item", "-"),
            Block.thematic_break(),
            Block.inline_code("x"),
        ],
    )
    def test_content_clears_heading_level(self, flow, content):
        flow.emit_heading(2, "Heading")
        assert flow.state.last_heading_level == 2

        flow.emit(content)

        assert flow.state.last_heading_level == 0

    def test_heading_replaces_heading_level(self, flow):
        flow.emit_heading(1, "Top")
        flow.emit_heading(3, "Sub")

        assert flow.state.last_heading_level == 3

    def test_empty_text_is_a_no_op(self, surface, flow):
        flow.emit_heading(1, "")
        flow.emit_paragraph("")
        flow.emit_code("")
        flow.emit_list_item("", "-")
        flow.emit_inline_code("")
        flow.emit_highlighted_code("")

        assert surface.calls == []
        assert surface.get_cursor() == (20.0, 30.0)
        assert flow.blocks_emitted == 0


class TestListPrefix:
    @pytest.mark.parametrize("marker", ["-", "+", "*"])
    def test_unordered_markers_use_bullet(self, marker):
        assert list_prefix(marker, 4) == BULLET

    @pytest.mark.parametrize("marker", [".", ")"])
    def test_ordered_markers_use_ordinal(self, marker):
        assert list_prefix(marker, 7) == "7. "

    @pytest.mark.parametrize(
        "marker,ordinal",
        [(".", None), (")", 0), (".", -2), ("?", 3), (None, 1), ("", None)],
    )
    def test_unusable_marker_or_ordinal_falls_back_to_bullet(self, marker, ordinal):
        assert list_prefix(marker, ordinal) == BULLET

    def test_emitted_fallback_item(self, surface, flow):
        flow.emit_list_item("Orphan", ".", None)

        assert surface.texts() == [BULLET + "Orphan"]


class TestCursorBounds:
    def test_gap_never_passes_bottom_margin(self, surface, flow):
        surface.set_cursor(20.0, 275.0)

        flow.emit_thematic_break()

        line = surface.ops("line")[0]
        assert line["y1"] == CONTENT_BOTTOM
        assert surface.get_cursor()[1] == CONTENT_BOTTOM
        assert flow.state.cursor_y <= CONTENT_BOTTOM

    def test_content_after_clamped_gap_goes_to_next_page(self, surface, flow):
        surface.set_cursor(20.0, 275.0)
        flow.emit_thematic_break()

        flow.emit_paragraph("Next")

        assert surface.find_text("Next")["page"] == 2
        assert surface.find_text("Next")["y"] == 30.0

    def test_long_paragraph_continues_on_next_page(self, surface, flow):
        flow.emit_paragraph(lines(50))

        on_second = [call for call in surface.ops("text") if call["page"] == 2]
        assert len(on_second) == 9
        assert all(call["y"] + 6.0 <= CONTENT_BOTTOM for call in surface.ops("text"))
        assert flow.state.current_page == 2
        assert flow.state.cursor_y == pytest.approx(88.0)


class TestCode:
    def test_plain_code_is_filled(self, surface, flow):
        flow.emit_code("a = 1\n\tb = 2\n")

        drawn = surface.ops("text")
        assert [call["text"] for call in drawn] == ["a = 1", "    b = 2"]
        assert all(call["fill"] == FlowMetrics().code_fill for call in drawn)
        assert drawn[0]["font"].size == 11.0

    def test_highlighted_code_uses_palette(self, surface, flow):
        flow.emit_highlighted_code("def build():\n    return 42\n", language="python")

        assert surface.find_text("def")["color"] == DEFAULT_PALETTE["keyword"]
        assert surface.find_text("build")["color"] == DEFAULT_PALETTE["function"]
        assert surface.find_text("42")["color"] == DEFAULT_PALETTE["number"]
        assert surface.find_text("def")["y"] == 30.0
        assert surface.find_text("42")["y"] == pytest.approx(36.0)
        # Two lines plus the code gap.
        assert surface.get_cursor()[1] == pytest.approx(45.0)

    def test_highlighted_code_breaks_mid_block(self, surface, flow):
        surface.set_cursor(20.0, 250.0)
        tokens = [("x = 1", "text"), ("\n", "text")] * 10

        flow.emit_highlighted_code(lines(10, "x ="), tokens=tokens)

        runs = surface.ops("inline")
        assert len(runs) == 10
        assert surface.page_number == 2
        assert [run["page"] for run in runs] == [1] * 4 + [2] * 6
        assert all(run["y"] + 6.0 <= CONTENT_BOTTOM for run in runs)
        assert runs[4]["y"] == 30.0

    def test_unknown_category_is_black(self, surface, flow):
        flow.emit_highlighted_code("thing", tokens=[("thing", "mystery")])

        assert surface.find_text("thing")["color"] == (0, 0, 0)

    def test_long_token_wraps_at_right_margin(self, surface, flow):
        # 11pt code is 2.2 mm per character: 77 characters fit in 170 mm.
        flow.emit_highlighted_code("y" * 100, tokens=[("y" * 100, "text")])

        runs = surface.ops("inline")
        assert [len(run["text"]) for run in runs] == [77, 23]
        assert runs[1]["y"] == pytest.approx(36.0)
        assert runs[1]["x"] == 20.0

    def test_tabs_align_to_line_columns(self, surface, flow):
        flow.emit_highlighted_code("x = 1\tfoo\n", language="python")

        runs = surface.ops("inline")
        assert "".join(run["text"] for run in runs) == "x = 1   foo"
        assert surface.find_text("foo")["x"] == pytest.approx(20.0 + 8 * 2.2)


class TestInlineAndImages:
    def test_inline_code_advances_horizontally(self, surface, flow):
        flow.emit_inline_code("x")

        run = surface.find_text("x")
        assert run["fill"] == (245, 245, 245)
        x, y = surface.get_cursor()
        assert y == 30.0
        assert x == pytest.approx(20.0 + 2.2 + 4.0)

    def test_image_is_placed_at_natural_size(self, surface, flow, png_image):
        flow.emit_image(str(png_image))

        image = surface.ops("image")[0]
        assert image["width"] == pytest.approx(26.458, abs=0.01)
        assert image["height"] == pytest.approx(13.229, abs=0.01)
        assert image["y"] == 30.0
        assert surface.get_cursor()[1] == pytest.approx(30.0 + 13.229 + 4.0, abs=0.01)
        assert flow.blocks_emitted == 1

    def test_missing_image_is_skipped_with_warning(self, surface, flow, temp_dir, caplog):
        with caplog.at_level(logging.WARNING):
            flow.emit_image(str(temp_dir / "missing.png"))

        assert surface.calls == []
        assert flow.blocks_emitted == 0
        assert "Skipping image" in caplog.text

    def test_tall_image_after_heading_stops_at_bottom_margin(self, surface, flow, temp_dir):
        tall = temp_dir / "tall.png"
        Image.new("RGB", (500, 2000)).save(tall)

        flow.emit_heading(1, "Figure")
        flow.emit_image(str(tall))

        image = surface.ops("image")[0]
        assert surface.page_breaks == 0
        assert image["y"] == pytest.approx(45.0)
        assert image["y"] + image["height"] <= CONTENT_BOTTOM + 1e-6
        # Aspect ratio is kept.
        assert image["width"] == pytest.approx(image["height"] / 4.0)
        assert flow.state.cursor_y <= CONTENT_BOTTOM

    def test_tall_image_mid_page_moves_to_next_page(self, surface, flow, temp_dir):
        tall = temp_dir / "tall.png"
        Image.new("RGB", (500, 2000)).save(tall)
        surface.set_cursor(20.0, 150.0)

        flow.emit_image(str(tall))

        image = surface.ops("image")[0]
        assert (image["page"], image["y"]) == (2, 30.0)
        assert image["height"] == pytest.approx(CONTENT_BOTTOM - 30.0)
