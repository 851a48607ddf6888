"""
Tests for free-text sanitization.
"""

from log_service.sanitizer import sanitize


class TestSanitize:
    """Tests for sanitize()."""

    def test_none_passes_through(self):
        assert sanitize(None) is None

    def test_trims_whitespace(self):
        assert sanitize("  hello world \n") == "hello world"

    def test_script_tags_removed(self):
        assert sanitize("<script>alert(1)</script>") == "alert(1)"

    def test_html_tags_removed_case_insensitive(self):
        assert sanitize('<B>bold</B> <a href="x">link</a>') == "bold link"

    def test_non_tag_angle_brackets_kept(self):
        assert sanitize("a < b and 3 > 2") == "a < b and 3 > 2"
        assert sanitize("<1> is not a tag") == "<1> is not a tag"

    def test_single_quotes_doubled(self):
        assert sanitize("it's") == "it''s"

    def test_shell_literal_removed_as_whole(self):
        assert sanitize("a[;&|`$]b") == "ab"

    def test_shell_characters_kept_by_default(self):
        assert sanitize("rm -rf /; echo $HOME") == "rm -rf /; echo $HOME"

    def test_shell_characters_stripped_when_enabled(self):
        result = sanitize("rm -rf /; echo $HOME | cat & `id`", strip_shell_metacharacters=True)
        assert result == "rm -rf / echo HOME  cat  id"

    def test_truncated_to_1000(self):
        result = sanitize("x" * 1500)
        assert len(result) == 1000

    def test_truncation_applies_after_quote_doubling(self):
        result = sanitize("'" * 600)
        assert result == "'" * 1000

    def test_custom_max_length(self):
        assert sanitize("abcdef", max_length=3) == "abc"

    def test_empty_string(self):
        assert sanitize("   ") == ""

    def test_nul_characters_dropped(self):
        assert sanitize("a\x00b\x00") == "ab"

    def test_nul_cannot_split_a_script_literal(self):
        assert sanitize("<scr\x00ipt>x") == "x"

    def test_tag_names_are_ascii_only(self):
        # non-ASCII letters that case-fold onto ASCII are not tag starts
        assert sanitize("<\u017f>") == "<\u017f>"
        assert sanitize("<\u212a>") == "<\u212a>"
        assert sanitize("<B>x</B>") == "x"
