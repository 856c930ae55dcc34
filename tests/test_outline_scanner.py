"""
Tests for parsers/outline_scanner.py.

Covers:
- Headings: levels, trailing hashes, hashtags that are not headings
- List items: columns, checkbox chars, plain bullets, ordered markers
- Frontmatter and fenced code blocks are skipped
- No list items → list_items is None
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from parsers.outline_scanner import scan_content, scan_lines


class TestHeadings:
    def test_levels_and_lines(self):
        outline = scan_content("# One\ntext\n### Three\n")
        assert [(h.text, h.start_line, h.level) for h in outline.headings] == [
            ("One", 0, 1),
            ("Three", 2, 3),
        ]

    def test_closing_hashes_stripped(self):
        outline = scan_content("## Closed ##\n")
        assert outline.headings[0].text == "Closed"

    def test_hashtag_is_not_heading(self):
        outline = scan_content("#tag at line start\n")
        assert outline.headings == ()

    def test_headings_sorted_by_line(self):
        outline = scan_content("# a\n# b\n# c\n")
        lines = [h.start_line for h in outline.headings]
        assert lines == sorted(lines)


class TestListItems:
    def test_checkbox_chars(self):
        outline = scan_content("- [ ] open\n- [x] done\n- plain\n")
        assert [i.checkbox_char for i in outline.list_items] == [" ", "x", None]
        assert [i.is_task for i in outline.list_items] == [True, True, False]

    def test_start_column(self):
        outline = scan_content("- [ ] a\n    - [ ] b\n\t- [ ] c\n")
        assert [i.start_column for i in outline.list_items] == [0, 4, 1]

    def test_ordered_and_alternate_bullets(self):
        outline = scan_content("1. [ ] first\n2) [x] second\n* [ ] star\n+ [ ] plus\n")
        assert [i.checkbox_char for i in outline.list_items] == [" ", "x", " ", " "]

    def test_wikilink_is_not_checkbox(self):
        outline = scan_content("- [[Some note]]\n")
        assert outline.list_items[0].checkbox_char is None

    def test_checkbox_needs_trailing_space(self):
        outline = scan_content("- [x]stuck\n")
        assert outline.list_items[0].checkbox_char is None

    def test_empty_checkbox_line_is_still_item(self):
        outline = scan_content("- [ ]\n")
        assert outline.list_items[0].checkbox_char == " "

    def test_no_list_items_is_none(self):
        outline = scan_content("# Title\n\nprose\n")
        assert outline.list_items is None

    def test_emphasis_is_not_bullet(self):
        outline = scan_content("*emphasis* text\n")
        assert outline.list_items is None


class TestSkippedRegions:
    def test_frontmatter_skipped(self):
        content = "---\ntitle: x\n# not heading\n---\n# Real\n- [ ] task\n"
        outline = scan_content(content)
        assert [h.text for h in outline.headings] == ["Real"]
        assert outline.headings[0].start_line == 4
        assert outline.list_items[0].start_line == 5

    def test_unclosed_frontmatter_ignored(self):
        outline = scan_content("---\n- [ ] task\n")
        assert outline.list_items[0].start_line == 1

    def test_fenced_code_skipped(self):
        content = "```\n# comment\n- [ ] fake\n```\n- [ ] real\n"
        outline = scan_content(content)
        assert outline.headings == ()
        assert [i.start_line for i in outline.list_items] == [4]

    def test_tilde_fence_not_closed_by_backticks(self):
        content = "~~~\n```\n- [ ] fake\n~~~\n- [ ] real\n"
        outline = scan_content(content)
        assert [i.start_line for i in outline.list_items] == [4]

    def test_scan_lines_matches_scan_content(self):
        content = "# A\n- [ ] a\n"
        assert scan_lines(content.split("\n")) == scan_content(content)
