"""
Tests for the tokenizer, the grouper and redirection parsing
"""
import pytest

from wish.command_parser import (
    CommandGroup, ParsedGroup, tokenize, group_tokens,
    parse_command_line, parse_group
)
from wish.exceptions import RedirectionSyntaxError, UsageError


# ============================================================================
# TOKENIZER
# ============================================================================

@pytest.mark.parametrize("line, expected", [
    ("ls -la\n", ["ls", "-la"]),
    ("ls  -la \n", ["ls", "-la"]),
    ("   echo    hi   there\n", ["echo", "hi", "there"]),
    ("echo hi", ["echo", "hi"]),
    ("ls > out\n", ["ls", ">", "out"]),
])
def test_tokenize(line, expected):
    assert tokenize(line) == expected


@pytest.mark.parametrize("line", ["\n", "   \n", ""])
def test_tokenize_empty_line(line):
    assert tokenize(line) == []


# ============================================================================
# GROUPER
# ============================================================================

def test_single_group():
    assert group_tokens(["ls", "-la"]) == [CommandGroup(("ls", "-la"))]


def test_groups_keep_encounter_order():
    groups = group_tokens(["a", "1", "&", "b", "&", "c", "2", "3"])
    assert [g.tokens for g in groups] == [("a", "1"), ("b",), ("c", "2", "3")]


def test_leading_trailing_and_repeated_operators_make_no_groups():
    groups = group_tokens(["&", "ls", "&", "&", "echo", "hi", "&"])
    assert [g.tokens for g in groups] == [("ls",), ("echo", "hi")]


@pytest.mark.parametrize("tokens", [[], ["&"], ["&", "&", "&"]])
def test_operators_only_yield_zero_groups(tokens):
    assert group_tokens(tokens) == []


@pytest.mark.parametrize("n", [1, 2, 5])
def test_n_runs_yield_n_groups(n):
    line = " & ".join(f"cmd{i} arg{i}" for i in range(n)) + "\n"
    groups = parse_command_line(line)
    assert len(groups) == n
    for i, group in enumerate(groups):
        assert group.tokens == (f"cmd{i}", f"arg{i}")


def test_command_group_properties():
    group = CommandGroup(("echo", "a", "b"))
    assert group.command == "echo"
    assert group.rest == ("a", "b")
    assert len(group) == 3
    assert repr(group) == "Group(echo a b)"


def test_command_group_rejects_empty():
    with pytest.raises(ValueError):
        CommandGroup(())


# ============================================================================
# GROUP PARSER
# ============================================================================

def test_parse_group_without_redirect():
    parsed = parse_group(CommandGroup(("ls", "-l", "/tmp")))
    assert parsed == ParsedGroup("ls", ["-l", "/tmp"], None)
    assert not parsed.has_redirect
    assert parsed.argv == ["ls", "-l", "/tmp"]


def test_parse_group_with_redirect():
    parsed = parse_group(CommandGroup(("echo", "a", "b", ">", "out.txt")))
    assert parsed.command == "echo"
    assert parsed.args == ["a", "b"]
    assert parsed.redirect_target == "out.txt"
    assert parsed.argv == ["echo", "a", "b"]


def test_parse_group_redirect_only_target():
    parsed = parse_group(CommandGroup(("ls", ">", "out")))
    assert parsed.args == []
    assert parsed.redirect_target == "out"


@pytest.mark.parametrize("tokens", [
    ("ls", ">", "a", ">", "b"),      # two operators
    ("ls", ">", ">", "b"),           # two operators, adjacent
    ("ls", ">"),                     # no target
    ("ls", ">", "a", "b"),           # two targets
    ("ls", ">", "a", "b", "c"),      # three targets
])
def test_bad_redirection(tokens):
    with pytest.raises(RedirectionSyntaxError) as excinfo:
        parse_group(CommandGroup(tokens))
    assert isinstance(excinfo.value, UsageError)
    assert excinfo.value.group == tokens


def test_parsed_group_repr():
    parsed = ParsedGroup("echo", ["hi"], "out.txt")
    assert repr(parsed) == "Parsed(echo hi [>out.txt])"
