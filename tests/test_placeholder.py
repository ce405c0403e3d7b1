"""
占位符计数测试
"""

import pytest

from xliff_tools.utils.placeholder import get_replacement_count, iter_format_items


class TestReplacementCount:
    """测试 get_replacement_count"""

    @pytest.mark.parametrize("text, expected", [
        ("", 0),
        ("Hello", 0),
        ("Hi {0}", 1),
        ("Salut {0} {1}", 2),
        ("{0} and {0} again", 1),
        ("only {1}", 2),
        ("{0,-10}|{1,5:N2}", 2),
        ("{2:yyyy-MM-dd}", 3),
    ])
    def test_counts(self, text, expected):
        assert get_replacement_count(text) == expected

    def test_escaped_braces_ignored(self):
        """{{0}} 是字面量，不是格式项"""
        assert get_replacement_count("{{0}}") == 0
        assert get_replacement_count("{{{0}}}") == 1

    def test_named_and_malformed_items_ignored(self):
        assert get_replacement_count("{name} {x:1}") == 0
        assert get_replacement_count("{ 0}") == 0
        assert get_replacement_count("{0") == 0

    def test_iter_format_items(self):
        items = list(iter_format_items("{0} of {1:N0}, {{2}}"))
        assert items == [(0, "{0}"), (1, "{1:N0}")]
