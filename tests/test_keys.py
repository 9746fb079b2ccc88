"""Tests for the key-path tokenizer."""

from qs_core.keys import UNSAFE_KEYS, Segment, SegmentKind, tokenize_key

ROOT = SegmentKind.ROOT
BRACKET = SegmentKind.BRACKET
OVERFLOW = SegmentKind.OVERFLOW


def test_plain_key():
    assert tokenize_key("a") == [Segment(ROOT, "a")]


def test_brackets():
    assert tokenize_key("a[b][c]") == [
        Segment(ROOT, "a"),
        Segment(BRACKET, "b"),
        Segment(BRACKET, "c"),
    ]


def test_empty_brackets():
    assert tokenize_key("a[]") == [Segment(ROOT, "a"), Segment(BRACKET, "")]


def test_no_parent():
    assert tokenize_key("[a][b]") == [Segment(BRACKET, "a"), Segment(BRACKET, "b")]


def test_unclosed_bracket_is_part_of_parent():
    assert tokenize_key("a[b") == [Segment(ROOT, "a[b")]


def test_empty_key_rejected():
    assert tokenize_key("") is None


def test_dots_rewritten():
    assert tokenize_key("a.b.c", allow_dots=True) == [
        Segment(ROOT, "a"),
        Segment(BRACKET, "b"),
        Segment(BRACKET, "c"),
    ]


def test_dots_kept_without_allow_dots():
    assert tokenize_key("a.b") == [Segment(ROOT, "a.b")]


def test_overflow_keeps_remainder():
    assert tokenize_key("a[b][c][d]", depth=1) == [
        Segment(ROOT, "a"),
        Segment(BRACKET, "b"),
        Segment(OVERFLOW, "[c][d]"),
    ]


def test_depth_zero():
    assert tokenize_key("a[b]", depth=0) == [Segment(ROOT, "a"), Segment(OVERFLOW, "[b]")]


def test_overflow_not_validated():
    segments = tokenize_key("a[b][__proto__]", depth=1)
    assert segments[-1] == Segment(OVERFLOW, "[__proto__]")


class TestPrototypeGuard:
    def test_parent_rejected(self):
        assert tokenize_key("__proto__") is None
        assert tokenize_key("hasOwnProperty[a]") is None

    def test_child_rejected(self):
        assert tokenize_key("a[__proto__][x]") is None
        assert tokenize_key("a[b][constructor]") is None

    def test_dotted_child_rejected(self):
        assert tokenize_key("a.toString", allow_dots=True) is None

    def test_guard_disabled(self):
        assert tokenize_key("a[__proto__]", allow_prototypes=True) == [
            Segment(ROOT, "a"),
            Segment(BRACKET, "__proto__"),
        ]

    def test_unsafe_names(self):
        assert {"__proto__", "constructor", "valueOf"} <= UNSAFE_KEYS
        assert "proto" not in UNSAFE_KEYS
