import logging
from pathlib import Path

import pytest

from lisensor.comment_styles import is_supported, style_for
from lisensor.glob_index import (
    GlobIndex,
    GlobPattern,
    normalize_path,
    normalize_pattern,
)
from lisensor.models import CommentStyle, PatternSource

ROOT = Path("/repo")


def _source(pattern: str, holder: str = "Acme", license: str = "MIT", origin: str = "a.toml"):
    return PatternSource(
        holder=holder,
        pattern=pattern,
        license=license,
        base_dir=ROOT,
        origin=origin,
    )


@pytest.mark.parametrize(
    ("path", "style"),
    [
        ("src/main.rs", CommentStyle.SLASH_SLASH),
        ("web/app.TSX", CommentStyle.SLASH_SLASH),
        ("scripts/run.py", CommentStyle.HASH),
        ("config.yml", CommentStyle.HASH),
        ("README.md", None),
        ("Makefile", None),
    ],
)
def test_style_for(path: str, style) -> None:
    assert style_for(path) == style
    assert is_supported(path) is (style is not None)


def test_normalize_pattern_joins_relative_to_base() -> None:
    assert normalize_pattern("src/**/*.rs", ROOT) == "/repo/src/**/*.rs"
    assert normalize_pattern("./src/../lib/*.rs", ROOT) == "/repo/lib/*.rs"
    assert normalize_pattern("/abs/*.py", ROOT) == "/abs/*.py"


def test_normalize_path_uses_root() -> None:
    assert normalize_path("src/a.rs", "/repo") == "/repo/src/a.rs"
    assert normalize_path("/elsewhere/a.rs", "/repo") == "/elsewhere/a.rs"


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("/repo/src/**/*.rs", "/repo/src/a.rs", True),
        ("/repo/src/**/*.rs", "/repo/src/x/y/a.rs", True),
        ("/repo/src/**/*.rs", "/repo/src/a.py", False),
        ("/repo/src/**/*.rs", "/repo/other/a.rs", False),
        ("/repo/*.rs", "/repo/a/b.rs", False),
        ("/repo/**", "/repo/a/b.txt", True),
        ("/repo/?.rs", "/repo/a.rs", True),
        ("/repo/?.rs", "/repo/ab.rs", False),
        ("/repo/[!a].rs", "/repo/b.rs", True),
        ("/repo/[!a].rs", "/repo/a.rs", False),
        ("/repo/[ab].rs", "/repo/b.rs", True),
        ("/repo/[!]a].rs", "/repo/b.rs", True),
        ("/repo/[!]a].rs", "/repo/a.rs", False),
        ("/repo/[!]a].rs", "/repo/].rs", False),
        ("/repo/[]a].rs", "/repo/].rs", True),
        ("/repo/[]a].rs", "/repo/b.rs", False),
        ("/repo/[[]x.rs", "/repo/[x.rs", True),
        ("/repo/src/main.rs", "/repo/src/main.rs", True),
        ("/repo/src/main.rs", "/repo/src/main.rsx", False),
    ],
)
def test_glob_matching(pattern: str, path: str, expected: bool) -> None:
    assert GlobPattern.compile(pattern).matches(path) is expected


def test_glob_pattern_base_directory() -> None:
    magic = GlobPattern.compile("/repo/src/**/*.rs")
    literal = GlobPattern.compile("/repo/src/main.rs")

    assert magic.base == "/repo/src"
    assert not magic.literal
    assert literal.base == "/repo/src"
    assert literal.literal


def test_build_indexes_rules_in_order() -> None:
    index, conflicts = GlobIndex.build(
        [_source("src/*.rs"), _source("tests/*.py", holder="Other")], root=ROOT
    )

    assert conflicts == []
    assert [rule.pattern for rule in index.rules] == ["/repo/src/*.rs", "/repo/tests/*.py"]
    assert [rule.order for rule in index.rules] == [0, 1]
    assert [pattern.text for pattern in index.patterns] == [
        "/repo/src/*.rs",
        "/repo/tests/*.py",
    ]


def test_build_drops_repeated_glob_with_same_config(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="lisensor")

    index, conflicts = GlobIndex.build(
        [_source("src/*.rs"), _source("./src/*.rs", origin="b.toml")], root=ROOT
    )

    assert conflicts == []
    assert len(index.rules) == 1
    assert "specified multiple times" in caplog.text


def test_build_reports_conflicting_config_for_same_glob() -> None:
    index, conflicts = GlobIndex.build(
        [_source("src/*.rs"), _source("src/*.rs", license="Apache-2.0", origin="b.toml")],
        root=ROOT,
    )

    assert len(conflicts) == 1
    conflict = conflicts[0]
    assert conflict.pattern == "/repo/src/*.rs"
    assert conflict.rule_a.license == "MIT"
    assert conflict.rule_b.license == "Apache-2.0"
    assert "b.toml" in conflict.describe()
    assert len(index.rules) == 2


def test_match_relative_path_against_root() -> None:
    index, _ = GlobIndex.build(
        [_source("**/*.rs", holder="Other"), _source("src/*.rs")], root=ROOT
    )

    matched = index.match("src/a.rs")

    assert [rule.holder for rule in matched] == ["Other", "Acme"]
    assert index.match("docs/a.md") == []
