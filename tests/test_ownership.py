from pathlib import Path

from lisensor.glob_index import GlobIndex
from lisensor.models import (
    ConflictingCoverage,
    OwnershipStatus,
    PatternSource,
    Resolved,
    Unmatched,
)
from lisensor.ownership import OwnershipResolver

ROOT = Path("/repo")


def _resolver(*entries: tuple[str, str, str]) -> OwnershipResolver:
    sources = [
        PatternSource(
            holder=holder,
            pattern=pattern,
            license=license,
            base_dir=ROOT,
            origin="Lisensor.toml",
        )
        for holder, pattern, license in entries
    ]
    index, conflicts = GlobIndex.build(sources, root=ROOT)
    assert conflicts == []
    return OwnershipResolver(index)


def test_unmatched_file() -> None:
    resolver = _resolver(("Acme", "src/*.rs", "MIT"))

    ownership = resolver.resolve("/repo/docs/index.rs")

    assert isinstance(ownership, Unmatched)
    assert ownership.status == OwnershipStatus.UNMATCHED


def test_overlapping_globs_with_same_config_resolve() -> None:
    resolver = _resolver(("Acme", "src/*.rs", "MIT"), ("Acme", "**/*.rs", "MIT"))

    ownership = resolver.resolve("/repo/src/lib.rs")

    assert isinstance(ownership, Resolved)
    assert ownership.status == OwnershipStatus.RESOLVED
    assert ownership.rule.pattern == "/repo/**/*.rs"


def test_overlapping_globs_with_different_config_conflict() -> None:
    resolver = _resolver(("Acme", "src/*.rs", "MIT"), ("Other", "**/*.rs", "Apache-2.0"))

    ownership = resolver.resolve("/repo/src/lib.rs")

    assert isinstance(ownership, ConflictingCoverage)
    assert ownership.status == OwnershipStatus.CONFLICTING_COVERAGE
    assert len(ownership.rules) == 2
    assert ownership.rule.holder == "Other"
    assert "'/repo/src/*.rs'" in ownership.describe()


def test_conflict_choice_does_not_depend_on_declaration_order() -> None:
    forward = _resolver(("Acme", "src/*.rs", "MIT"), ("Other", "**/*.rs", "MIT"))
    backward = _resolver(("Other", "**/*.rs", "MIT"), ("Acme", "src/*.rs", "MIT"))

    assert forward.resolve("/repo/src/a.rs").rule.holder == "Other"
    assert backward.resolve("/repo/src/a.rs").rule.holder == "Other"
