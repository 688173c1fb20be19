import sys

import pytest

from ganymede_toolkit.core.nodes import PlainPassthrough, PositionToken
from ganymede_toolkit.core.transform.positions import (
    PositionMatch,
    format_copy_text,
    scan_positions,
    split_positions,
)

INT_DIGITS_LIMIT = getattr(sys, "get_int_max_str_digits", lambda: 0)()


def _joined(pieces):
    out = []
    for piece in pieces:
        if isinstance(piece, PositionMatch):
            out.append(f"{piece.prefix}[{piece.x},{piece.y}]{piece.suffix}")
        else:
            out.append(piece)
    return "".join(out)


class TestScanPositions:
    """Test cases for the coordinate scanner."""

    def test_single_coordinate_with_prefix_and_suffix(self):
        assert scan_positions("Go to [12,-34] then rest.") == [
            PositionMatch("Go to ", 12, -34, " then rest.")
        ]

    def test_no_brackets_is_no_match(self):
        assert scan_positions("no brackets here") == []
        assert split_positions("no brackets here") is None

    def test_adjacent_coordinates_in_order(self):
        matches = scan_positions("[1,2][3,4]")
        assert [(m.x, m.y) for m in matches] == [(1, 2), (3, 4)]
        assert all(m.prefix == "" and m.suffix == "" for m in matches)

    def test_whitespace_inside_brackets(self):
        assert scan_positions("[ -5 , 6 ]") == [PositionMatch("", -5, 6, "")]

    def test_non_numeric_brackets_ignored(self):
        assert scan_positions("see [a,b] or [1;2]") == []

    def test_accented_suffix_is_captured(self):
        (match,) = scan_positions("Zaap [4,-19] près d'Astrub")
        assert match.suffix == " près d'Astrub"


class TestSplitPositions:
    """Nothing outside the matches may be dropped."""

    def test_trailing_text_outside_suffix_class_is_kept(self):
        pieces = split_positions("At [1,2]! Then go")
        assert pieces == [PositionMatch("At ", 1, 2, ""), "! Then go"]

    def test_prefix_spans_newlines(self):
        pieces = split_positions("line one\nline [3, 4] end")
        assert pieces == [PositionMatch("line one\nline ", 3, 4, " end")]

    def test_concatenation_covers_input(self):
        for text in (
            "Go to [12,-34] then rest.",
            "[1,2][3,4]",
            "a (b) [0,0]? c\n[5,5] -> done!",
            "x [1,1] y [2,2] z",
        ):
            assert _joined(split_positions(text)) == text


class TestCopyText:
    def test_raw_coordinates(self):
        assert format_copy_text(3, -7, auto_travel=False) == "[3,-7]"

    def test_autopilot_command(self):
        assert format_copy_text(3, -7, auto_travel=True) == "/travel 3,-7"


def test_text_node_is_replaced_by_fragment(render):
    (p,) = render("<p>Go to [12,-34] then rest.</p>")
    (fragment,) = p.children
    assert isinstance(fragment, PlainPassthrough) and fragment.tag is None and fragment.text is None
    prefix, token, suffix = fragment.children
    assert prefix.text == "Go to "
    assert isinstance(token, PositionToken) and (token.x, token.y) == (12, -34)
    assert token.copy_text == "[12,-34]"
    assert suffix.text == " then rest."


def test_plain_text_stays_passthrough(render):
    (p,) = render("<p>no brackets here</p>")
    (text,) = p.children
    assert isinstance(text, PlainPassthrough)
    assert text.text == "no brackets here"
    assert text.children == []


def test_auto_travel_and_disabled_flow_into_tokens(render, make_ctx, collect):
    nodes = render("<p>[1,2]</p>", make_ctx(auto_travel_copy=True, disabled=True))
    (token,) = collect(nodes, PositionToken)
    assert token.copy_text == "/travel 1,2"
    assert token.disabled is True


def test_suffix_takes_parentheses_and_question_marks():
    (match,) = scan_positions("Zaap [4,-19] (Astrub)? | then north")
    assert match.suffix == " (Astrub)? | then north"


@pytest.mark.skipif(INT_DIGITS_LIMIT == 0, reason="interpreter has no int conversion limit")
def test_unconvertible_match_is_left_in_plain_text():
    big = "9" * (INT_DIGITS_LIMIT + 1)
    text = f"a [{big},1] b [2,3]"
    assert scan_positions(text) == [PositionMatch("", 2, 3, "")]
    assert split_positions(text) == [f"a [{big},1] b ", PositionMatch("", 2, 3, "")]
    assert split_positions(f"only [{big},1]") is None
