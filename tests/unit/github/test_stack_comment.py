"""Tests for the stack comment wire format."""

import base64

from stakk.core.github.comment import (
    COMMENT_DATA_POSTFIX,
    COMMENT_DATA_PREFIX,
    STACK_COMMENT_FOOTER,
    StackCommentData,
    StackEntry,
    encode_stack_data,
    find_stack_comment,
    format_stack_comment,
    parse_stack_comment,
)
from stakk.core.github.types import Comment


def _data(count: int) -> StackCommentData:
    return StackCommentData(
        version=0,
        stack=[
            StackEntry(
                bookmark_name=f"feature-{i}",
                pr_url=f"https://github.com/owner/repo/pull/{i}",
                pr_number=i,
            )
            for i in range(1, count + 1)
        ],
    )


def test_encoded_payload_is_compact_json() -> None:
    """The marker carries base64 of whitespace-free JSON in field order."""
    data = StackCommentData(
        version=0,
        stack=[StackEntry(bookmark_name="a", pr_url="https://x/1", pr_number=1)],
    )

    decoded = base64.b64decode(encode_stack_data(data)).decode("utf-8")

    assert decoded == (
        '{"version":0,"stack":[{"bookmark_name":"a","pr_url":"https://x/1","pr_number":1}]}'
    )


def test_format_renders_full_body() -> None:
    data = _data(2)

    body = format_stack_comment(data, 1)

    assert body.split("\n") == [
        f"{COMMENT_DATA_PREFIX}{encode_stack_data(data)}{COMMENT_DATA_POSTFIX}",
        "This PR is part of a stack of 2 bookmarks:",
        "",
        "1. `trunk()`",
        "1. https://github.com/owner/repo/pull/1",
        "1. **https://github.com/owner/repo/pull/2 ← this PR**",
        "",
        "---",
        STACK_COMMENT_FOOTER,
    ]


def test_format_singular_bookmark() -> None:
    body = format_stack_comment(_data(1), 0)

    assert "This PR is part of a stack of 1 bookmark:" in body


def test_only_current_entry_is_highlighted() -> None:
    body = format_stack_comment(_data(3), 0)

    assert body.count("← this PR") == 1
    assert "1. **https://github.com/owner/repo/pull/1 ← this PR**" in body


def test_parse_round_trip() -> None:
    data = _data(3)

    for index in range(3):
        assert parse_stack_comment(format_stack_comment(data, index)) == data


def test_parse_round_trip_with_unicode_names() -> None:
    data = StackCommentData(
        version=0,
        stack=[StackEntry(bookmark_name="féature/ü", pr_url="https://x/9", pr_number=9)],
    )

    assert parse_stack_comment(format_stack_comment(data, 0)) == data


def test_parse_ignores_body_without_marker() -> None:
    assert parse_stack_comment("Looks good to me!") is None
    assert parse_stack_comment("") is None


def test_parse_only_reads_first_line() -> None:
    """A marker further down the body is not metadata."""
    valid = format_stack_comment(_data(1), 0)

    assert parse_stack_comment(f"Quoting the bot:\n{valid}") is None


def test_parse_rejects_invalid_base64() -> None:
    body = f"{COMMENT_DATA_PREFIX}not base64!!{COMMENT_DATA_POSTFIX}"

    assert parse_stack_comment(body) is None


def test_parse_rejects_invalid_utf8() -> None:
    token = base64.b64encode(b"\xff\xfe\xfd").decode("ascii")

    assert parse_stack_comment(f"{COMMENT_DATA_PREFIX}{token}{COMMENT_DATA_POSTFIX}") is None


def test_parse_rejects_invalid_json() -> None:
    token = base64.b64encode(b"{not json").decode("ascii")

    assert parse_stack_comment(f"{COMMENT_DATA_PREFIX}{token}{COMMENT_DATA_POSTFIX}") is None


def test_parse_rejects_schema_mismatch() -> None:
    token = base64.b64encode(b'{"version":"zero","stack":[]}').decode("ascii")

    assert parse_stack_comment(f"{COMMENT_DATA_PREFIX}{token}{COMMENT_DATA_POSTFIX}") is None


def test_parse_requires_postfix() -> None:
    token = encode_stack_data(_data(1))

    assert parse_stack_comment(f"{COMMENT_DATA_PREFIX}{token}") is None


def test_find_returns_first_managed_comment() -> None:
    managed = format_stack_comment(_data(1), 0)
    comments = [
        Comment(id=1, body="LGTM"),
        Comment(id=2, body=managed),
        Comment(id=3, body=managed),
    ]

    found = find_stack_comment(comments)

    assert found is not None
    assert found.id == 2


def test_find_ignores_marker_outside_first_line() -> None:
    comments = [Comment(id=1, body=f"see below\n{COMMENT_DATA_PREFIX}abc{COMMENT_DATA_POSTFIX}")]

    assert find_stack_comment(comments) is None


def test_find_matches_marker_even_with_corrupt_payload() -> None:
    """Detection only needs the prefix, so a damaged comment is still reused."""
    comments = [Comment(id=7, body=f"{COMMENT_DATA_PREFIX}%%%{COMMENT_DATA_POSTFIX}")]

    found = find_stack_comment(comments)

    assert found is not None
    assert found.id == 7
