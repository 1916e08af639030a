from __future__ import annotations

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from errors import ParleySyntaxError
from parser import parse
from syntax_tree import Rule, node_to_dict


# ---------- identifier ----------

@pytest.mark.parametrize(
    "text",
    ["a", "A", "_", "abcdefg", "ABCDEFG", "_______", "aCggW", "_aC__ggW", "_aC_55_gg2W"],
)
def test_identifier_valid(text: str) -> None:
    node = parse(text, Rule.IDENTIFIER)

    assert node.rule == Rule.IDENTIFIER
    assert node.text == text
    assert node.value == text


@pytest.mark.parametrize("text", ["2", "1265322", "12aGG3asdg3"])
def test_identifier_starting_with_digit_invalid(text: str) -> None:
    with pytest.raises(ParleySyntaxError):
        parse(text, Rule.IDENTIFIER)


# ---------- string_literal ----------

@pytest.mark.parametrize(
    "text",
    ['"Hello, world!"', '"Hello,\\nworld!"', '"Hello,\\"world!"', '""'],
)
def test_string_literal_carries_raw_inner_text(text: str) -> None:
    node = parse(text, Rule.STRING_LITERAL)

    assert node.text == text
    assert node.value == text[1:-1]


# ---------- handle / handle_group ----------

def test_empty_handle_invalid() -> None:
    with pytest.raises(ParleySyntaxError):
        parse("@", Rule.HANDLE)


def test_simple_handle_valid() -> None:
    node = parse("@_a", Rule.HANDLE)

    assert node.text == "@_a"
    assert node.first().rule == Rule.IDENTIFIER
    assert node.first().value == "_a"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("(@_a)", ["_a"]),
        ("(@_a & @i & @bbb)", ["_a", "i", "bbb"]),
        ("( @x&@y )", ["x", "y"]),
    ],
)
def test_handle_group_preserves_order(text: str, expected: list[str]) -> None:
    node = parse(text, Rule.HANDLE_GROUP)

    assert [h.first().value for h in node.children] == expected


@pytest.mark.parametrize("text", ["(@_a & @i &)", "()", "(@a @b)", "(@a"])
def test_handle_group_invalid(text: str) -> None:
    with pytest.raises(ParleySyntaxError):
        parse(text, Rule.HANDLE_GROUP)


# ---------- choice / choice_group ----------

def test_simple_choice_valid() -> None:
    node = parse('"Hello!": start', Rule.CHOICE)

    assert len(node.children) == 2
    literal, target = node.children
    assert (literal.rule, target.rule) == (Rule.STRING_LITERAL, Rule.IDENTIFIER)
    assert (literal.value, target.value) == ("Hello!", "start")


def test_choice_target_is_bare_identifier() -> None:
    with pytest.raises(ParleySyntaxError):
        parse('"Hello!": @start', Rule.CHOICE)


@pytest.mark.parametrize(
    "text, expected",
    [
        ('("Hello!": start)', [("Hello!", "start")]),
        ('("Hello!": start | "Goodbye": end)', [("Hello!", "start"), ("Goodbye", "end")]),
    ],
)
def test_choice_group_valid(text: str, expected: list[tuple[str, str]]) -> None:
    node = parse(text, Rule.CHOICE_GROUP)

    got = [(c.children[0].value, c.children[1].value) for c in node.children]
    assert got == expected


def test_trailing_pipe_in_choice_group_invalid() -> None:
    with pytest.raises(ParleySyntaxError):
        parse('("Hello!": start | "Goodbye": end |)', Rule.CHOICE_GROUP)


# ---------- label ----------

def test_empty_label_invalid() -> None:
    with pytest.raises(ParleySyntaxError):
        parse(":", Rule.LABEL)


def test_simple_label_valid() -> None:
    node = parse("start:", Rule.LABEL)

    assert node.text == "start:"
    assert node.first().value == "start"


def test_label_colon_must_touch_name() -> None:
    with pytest.raises(ParleySyntaxError):
        parse("start :", Rule.LABEL)


# ---------- statements ----------

def test_name_statement_valid() -> None:
    node = parse('@m = "Hello kitty"', Rule.NAME_STATEMENT)

    assert [c.rule for c in node.children] == [Rule.HANDLE, Rule.STRING_LITERAL]
    assert node.children[1].value == "Hello kitty"


def test_empty_speaker_phrase_statement_valid() -> None:
    node = parse(': "Hello kitty!"', Rule.PHRASE_STATEMENT)

    assert [c.rule for c in node.children] == [Rule.STRING_LITERAL]


def test_empty_handle_speaker_phrase_statement_invalid() -> None:
    with pytest.raises(ParleySyntaxError):
        parse('@: "Hello kitty!"', Rule.PHRASE_STATEMENT)


def test_single_speaker_phrase_statement_valid() -> None:
    node = parse('@m: "Hello kitty!"', Rule.PHRASE_STATEMENT)

    assert [c.rule for c in node.children] == [Rule.HANDLE, Rule.STRING_LITERAL]


def test_multiple_speakers_phrase_statement_valid() -> None:
    node = parse('(@m & @d): "Hello kitty!"', Rule.PHRASE_STATEMENT)

    assert [c.rule for c in node.children] == [Rule.HANDLE_GROUP, Rule.STRING_LITERAL]
    assert len(node.first().children) == 2


def test_single_option_choice_statement_valid() -> None:
    node = parse('? "Hello kitty!" : start', Rule.CHOICE_STATEMENT)

    assert node.first().rule == Rule.CHOICE


def test_multiple_options_choice_statement_valid() -> None:
    node = parse('? ("Hello kitty!" : start | "Hello britty!" : start)', Rule.CHOICE_STATEMENT)

    assert node.first().rule == Rule.CHOICE_GROUP


def test_simple_jump_statement_valid() -> None:
    node = parse("jump start", Rule.JUMP_STATEMENT)

    assert node.text == "jump start"
    assert node.first().value == "start"


def test_jump_needs_a_target() -> None:
    with pytest.raises(ParleySyntaxError):
        parse("jump", Rule.JUMP_STATEMENT)


@pytest.mark.parametrize(
    "text, rule",
    [
        ('@m = "Max";', Rule.NAME_STATEMENT),
        ('(@m & @d): "Max!";', Rule.PHRASE_STATEMENT),
        ('? "End" : end;', Rule.CHOICE_STATEMENT),
        ("jump middle;", Rule.JUMP_STATEMENT),
        ("middle:", Rule.LABEL),
        ("jump:", Rule.LABEL),
    ],
)
def test_statement_kinds(text: str, rule: Rule) -> None:
    node = parse(text, Rule.STATEMENT)

    assert node.rule == Rule.STATEMENT
    assert node.first().rule == rule
    assert node.text == text


@pytest.mark.parametrize("text", ["jump middle", '@m = "Max"', "middle", "middle :", ';'])
def test_statement_invalid(text: str) -> None:
    with pytest.raises(ParleySyntaxError):
        parse(text, Rule.STATEMENT)


# ---------- comment ----------

def test_simple_multi_line_comment_valid() -> None:
    node = parse("/* Hello?\n I love you. */", Rule.COMMENT)

    assert node.rule == Rule.COMMENT
    assert node.value == " Hello?\n I love you. "


def test_comments_do_not_nest() -> None:
    with pytest.raises(ParleySyntaxError):
        parse("/* outer /* inner */ */", Rule.PROGRAM)


# ---------- program ----------

@pytest.mark.parametrize(
    "text",
    [
        "",
        "/* Hello */",
        "/* Hello */ /* Lolololo */",
        "hi:",
        "hi: /* World */",
        'hi:\n@m = "Maria"; /* World */',
    ],
)
def test_program_valid(text: str) -> None:
    node = parse(text, Rule.PROGRAM)

    assert node.rule == Rule.PROGRAM


def test_program_children_in_source_order() -> None:
    node = parse('/* a */ hi:\n@m = "Maria"; /* b */', Rule.PROGRAM)

    assert [c.rule for c in node.children] == [Rule.COMMENT, Rule.STATEMENT, Rule.STATEMENT, Rule.COMMENT]


def test_comments_allowed_inside_statements() -> None:
    node = parse('? ( "A": a /* first */ | "B": b );', Rule.PROGRAM)

    statements = [c for c in node.children if c.rule == Rule.STATEMENT]
    assert len(statements) == 1
    assert len(statements[0].first().first().children) == 2


def test_syntax_error_location() -> None:
    with pytest.raises(ParleySyntaxError) as excinfo:
        parse('hi:\n  @m "x";')

    err = excinfo.value
    assert (err.line, err.column) == (2, 6)
    assert "Expected ':'" in str(err)
    assert str(err).endswith("at line 2, col 6")


def test_node_to_dict() -> None:
    tree = node_to_dict(parse("jump end;"))

    assert tree["rule"] == "program"
    jump = tree["children"][0]["children"][0]
    assert jump["rule"] == "jump_statement"
    assert jump["children"][0] == {"rule": "identifier", "value": "end", "at": "1:6"}
