"""
Tests for the static completion table.
"""

from code_echo.services.patterns import RULES, PatternKind, match_static


class TestRuleTable:
    def test_rules_are_ordered_by_precedence(self):
        assert [rule.kind for rule in RULES] == [
            PatternKind.MAIN_GUARD,
            PatternKind.IF_CONDITION,
            PatternKind.BLOCK_OPENER,
            PatternKind.BLOCK_BODY,
        ]


class TestMainGuard:
    def test_after_opening_quote(self):
        match = match_static('if __name__ == "')
        assert match.kind is PatternKind.MAIN_GUARD
        assert match.text == '__main__":'

    def test_partial_literal_is_completed(self):
        match = match_static("if __name__ == '__ma")
        assert match.kind is PatternKind.MAIN_GUARD
        assert match.text == "in__':"

    def test_before_any_quote(self):
        assert match_static("if __name__ ==").text == ' "__main__":'
        assert match_static("if __name__ == ").text == '"__main__":'

    def test_main_guard_wins_over_if_rule(self):
        """Both rules apply; the table order decides."""
        assert match_static('if __name__ == "').kind is PatternKind.MAIN_GUARD

    def test_complete_value_does_not_match(self):
        match = match_static('if __name__ == "__main__')
        assert match is None or match.kind is not PatternKind.MAIN_GUARD


class TestIfCondition:
    def test_bare_if(self):
        match = match_static("if")
        assert match.kind is PatternKind.IF_CONDITION
        assert match.text == " condition:"

    def test_if_with_space(self):
        match = match_static("    if ")
        assert match.kind is PatternKind.IF_CONDITION
        assert match.text == "condition:"

    def test_identifier_starting_with_if_does_not_match(self):
        assert match_static("iffy = ") is None


class TestBlockOpener:
    def test_colon_at_end(self):
        match = match_static("def area(self):")
        assert match.kind is PatternKind.BLOCK_OPENER
        assert match.text == "\n    pass"

    def test_keeps_current_indentation(self):
        match = match_static("    for item in items:")
        assert match.text == "\n        pass"


class TestBlockBody:
    def test_empty_line_after_colon(self):
        match = match_static("", previous_line="class Shape:")
        assert match.kind is PatternKind.BLOCK_BODY
        assert match.text == "    pass"

    def test_empty_line_after_def_without_colon(self):
        match = match_static("", previous_line="def build(a,")
        assert match.kind is PatternKind.BLOCK_BODY

    def test_partial_indentation_is_topped_up(self):
        match = match_static("  ", previous_line="    while True:")
        assert match.text == "      pass"

    def test_already_indented_cursor(self):
        match = match_static("        ", previous_line="    with open(path) as f:")
        assert match.text == "pass"

    def test_no_opener_above(self):
        assert match_static("", previous_line="x = 1") is None


class TestNoMatch:
    def test_ordinary_expression(self):
        assert match_static("total = compute(", previous_line="def run():") is None
