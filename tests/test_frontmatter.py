import unittest

from auto_insert_folder.core.frontmatter_operations import (
    find_closing_marker,
    has_frontmatter_block,
    merge_frontmatter_property,
    parse_frontmatter,
)


class MergeFrontmatterPropertyTests(unittest.TestCase):
    def test_creates_block_when_note_has_none(self) -> None:
        result = merge_frontmatter_property("", "folder", "Projects")
        self.assertEqual(result, "---\nfolder: Projects\n---\n")

    def test_whitespace_only_content_gets_fresh_block(self) -> None:
        result = merge_frontmatter_property("  \n", "folder", "Projects")
        self.assertEqual(result, "---\nfolder: Projects\n---\n")

    def test_appends_inside_existing_block_and_keeps_body(self) -> None:
        result = merge_frontmatter_property("---\ntags: a\n---\nBody text", "folder", "X")
        self.assertEqual(result, "---\ntags: a\nfolder: X\n---\nBody text")
        self.assertTrue(result.endswith("---\nBody text"))

    def test_existing_keys_are_kept_in_order(self) -> None:
        content = "---\ntitle: Plan\ntags:\n  - work\n---\n\n# Plan\n"
        result = merge_frontmatter_property(content, "folder", "Work")
        self.assertEqual(result, "---\ntitle: Plan\ntags:\n  - work\nfolder: Work\n---\n\n# Plan\n")

    def test_same_key_twice_produces_duplicate_lines(self) -> None:
        once = merge_frontmatter_property("", "folder", "A")
        twice = merge_frontmatter_property(once, "folder", "B")
        self.assertEqual(twice, "---\nfolder: A\nfolder: B\n---\n")
        self.assertEqual(twice.count("folder:"), 2)

    def test_empty_block_receives_only_the_new_line(self) -> None:
        result = merge_frontmatter_property("---\n---\n", "folder", "Inbox")
        self.assertEqual(result, "---\nfolder: Inbox\n---\n")

    def test_unterminated_block_is_left_untouched(self) -> None:
        content = "---\ntags: a\nno closing marker here"
        self.assertEqual(merge_frontmatter_property(content, "folder", "X"), content)

    def test_dashes_inside_a_value_do_not_close_the_block(self) -> None:
        content = "---\ntitle: a---b\n---\nBody"
        result = merge_frontmatter_property(content, "folder", "X")
        self.assertEqual(result, "---\ntitle: a---b\nfolder: X\n---\nBody")

    def test_result_parses_as_yaml(self) -> None:
        result = merge_frontmatter_property("---\ntags: a\n---\nBody text", "folder", "Work/Projects")
        metadata, body = parse_frontmatter(result)
        self.assertEqual(metadata, {"tags": "a", "folder": "Work/Projects"})
        self.assertEqual(body.strip(), "Body text")


class FrontmatterHelperTests(unittest.TestCase):
    def test_has_frontmatter_block_requires_marker_at_offset_zero(self) -> None:
        self.assertTrue(has_frontmatter_block("---\na: 1\n---\n"))
        self.assertFalse(has_frontmatter_block("\n---\na: 1\n---\n"))
        self.assertFalse(has_frontmatter_block(""))

    def test_find_closing_marker(self) -> None:
        self.assertEqual(find_closing_marker("---\na: 1\n---\n"), 9)
        self.assertEqual(find_closing_marker("---\n---"), 4)
        self.assertEqual(find_closing_marker("---\na: 1"), -1)

    def test_parse_frontmatter_handles_metadata_and_content(self) -> None:
        raw = "---\nfolder: Projects\ntags:\n  - test\n---\n\nBody text."
        metadata, body = parse_frontmatter(raw)
        self.assertEqual(metadata["folder"], "Projects")
        self.assertEqual(metadata["tags"], ["test"])
        self.assertEqual(body.strip(), "Body text.")

    def test_parse_frontmatter_without_block_returns_original_content(self) -> None:
        raw = "No frontmatter here."
        metadata, body = parse_frontmatter(raw)
        self.assertEqual(metadata, {})
        self.assertEqual(body, raw)

    def test_parse_frontmatter_rejects_invalid_yaml(self) -> None:
        with self.assertRaises(ValueError):
            parse_frontmatter("---\nfolder: [unclosed\n---\n")


if __name__ == "__main__":
    unittest.main()
