"""Tests for argument line formatting."""

from __future__ import annotations

import os

import pytest

from cmdinvoke.runtime.arguments import (
    build_argument_string,
    build_argv,
    combine,
    quote,
)


def test_quote_wraps_without_escaping() -> None:
    assert quote('say "hi"') == '"say "hi""'


def test_combine_quotes_each_token_with_single_spaces() -> None:
    assert combine(["s3", "ls", "my bucket"]) == '"s3" "ls" "my bucket"'


def test_combine_empty_sequence_is_empty_string() -> None:
    assert combine([]) == ""
    assert combine([], quote_items=False) == ""


def test_combine_without_quoting_adds_no_quote_characters() -> None:
    tokens = ["--profile", "default", 'already"quoted"']

    combined = combine(tokens, quote_items=False)

    assert combined == '--profile default already"quoted"'
    assert combined.count('"') == sum(token.count('"') for token in tokens)


def test_combine_accepts_any_iterable() -> None:
    assert combine(token for token in ("a", "b")) == '"a" "b"'


@pytest.mark.parametrize("arguments", [None, [], ()])
def test_build_argument_string_without_arguments_returns_sub_command(
    arguments: list[str] | None,
) -> None:
    assert build_argument_string("status", arguments) == "status"


def test_build_argument_string_appends_formatted_block() -> None:
    assert (
        build_argument_string("log", ["--oneline", "-n", "5"])
        == 'log "--oneline" "-n" "5"'
    )
    assert (
        build_argument_string("log", ["--oneline", "-n", "5"], quote_items=False)
        == "log --oneline -n 5"
    )


@pytest.mark.skipif(os.name == "nt", reason="POSIX argv splitting")
def test_build_argv_keeps_quoted_tokens_together() -> None:
    line = build_argument_string("commit", ["-m", "fix the bug"])

    assert build_argv("/usr/bin/git", line) == [
        "/usr/bin/git",
        "commit",
        "-m",
        "fix the bug",
    ]


@pytest.mark.skipif(os.name == "nt", reason="POSIX argv splitting")
def test_build_argv_rejects_unbalanced_quotes() -> None:
    with pytest.raises(ValueError):
        build_argv("/bin/echo", 'say "unterminated')


@pytest.mark.skipif(os.name == "nt", reason="POSIX argv splitting")
def test_build_argv_keeps_backslashes_verbatim() -> None:
    tokens = ["a\\\\b", "dir\\", "C:\\temp\\x"]
    line = build_argument_string("copy", tokens)

    assert build_argv("/bin/tool", line) == ["/bin/tool", "copy", *tokens]


@pytest.mark.skipif(os.name == "nt", reason="POSIX argv splitting")
def test_build_argv_treats_hash_and_empty_tokens_as_arguments() -> None:
    line = build_argument_string("tag", ["#release", ""])

    assert build_argv("/usr/bin/git", line) == ["/usr/bin/git", "tag", "#release", ""]


@pytest.mark.skipif(os.name == "nt", reason="POSIX argv splitting")
def test_build_argv_without_quoting_splits_on_whitespace_only() -> None:
    line = build_argument_string("ls", ["-l", "a\\ b"], quote_items=False)

    assert build_argv("/bin/ls", line) == ["/bin/ls", "ls", "-l", "a\\", "b"]
