from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class CommentStyle(str, Enum):
    SLASH_SLASH = "//"
    HASH = "#"

    @property
    def prefix(self) -> str:
        return self.value


class HeaderLineKind(str, Enum):
    LICENSE = "license"
    COPYRIGHT = "copyright"
    SENTINEL = "sentinel"
    OTHER = "other"


class OwnershipStatus(str, Enum):
    RESOLVED = "resolved"
    UNMATCHED = "unmatched"
    CONFLICTING_COVERAGE = "conflicting_coverage"


class ViolationKind(str, Enum):
    MISSING_LICENSE = "missing_license"
    LICENSE_MISMATCH = "license_mismatch"
    MISSING_COPYRIGHT = "missing_copyright"
    MALFORMED_COPYRIGHT = "malformed_copyright"
    HOLDER_MISMATCH = "holder_mismatch"
    STALE_YEAR = "stale_year"
    DUPLICATE_NOTICE = "duplicate_notice"


class FileStatus(str, Enum):
    CLEAN = "clean"
    FIXED = "fixed"
    VIOLATIONS = "violations"
    UNMATCHED = "unmatched"
    FIX_REFUSED = "fix_refused"
    CONFLICTING_COVERAGE = "conflicting_coverage"
    ERROR = "error"


FAILED_STATUSES = frozenset(
    {
        FileStatus.VIOLATIONS,
        FileStatus.FIX_REFUSED,
        FileStatus.CONFLICTING_COVERAGE,
        FileStatus.ERROR,
    }
)


@dataclass(frozen=True)
class PatternSource:
    holder: str
    pattern: str
    license: str
    base_dir: Path
    origin: str


@dataclass(frozen=True)
class Rule:
    holder: str
    license: str
    pattern: str
    origin: str
    order: int

    @property
    def key(self) -> tuple[str, str]:
        return self.holder, self.license

    def sort_key(self) -> tuple[str, int]:
        return self.pattern, self.order

    def describe(self) -> str:
        return f"holder '{self.holder}' and license '{self.license}' (from {self.origin})"


RuleSet = tuple[Rule, ...]


@dataclass(frozen=True)
class PatternConflict:
    pattern: str
    rule_a: Rule
    rule_b: Rule

    def describe(self) -> str:
        return (
            f"'{self.pattern}': {self.rule_a.describe()}"
            f" vs {self.rule_b.describe()}"
        )


@dataclass(frozen=True)
class Resolved:
    rule: Rule
    status: OwnershipStatus = field(default=OwnershipStatus.RESOLVED, init=False)


@dataclass(frozen=True)
class Unmatched:
    status: OwnershipStatus = field(default=OwnershipStatus.UNMATCHED, init=False)


@dataclass(frozen=True)
class ConflictingCoverage:
    rules: tuple[Rule, ...]
    status: OwnershipStatus = field(
        default=OwnershipStatus.CONFLICTING_COVERAGE, init=False
    )

    @property
    def rule(self) -> Rule:
        return min(self.rules, key=Rule.sort_key)

    def describe(self) -> str:
        seen: list[str] = []
        for rule in sorted(self.rules, key=Rule.sort_key):
            text = f"'{rule.pattern}' -> {rule.describe()}"
            if text not in seen:
                seen.append(text)
        return "; ".join(seen)


FileOwnership = Union[Resolved, Unmatched, ConflictingCoverage]


@dataclass(frozen=True)
class HeaderLine:
    kind: HeaderLineKind
    raw: str
    content: str = ""


@dataclass(frozen=True)
class YearRange:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"year range starts after it ends: {self.start}-{self.end}")

    def render(self) -> str:
        if self.start == self.end:
            return f"{self.start}"
        return f"{self.start}-{self.end}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class CopyrightNotice:
    years: Optional[YearRange]
    holder: str

    @property
    def well_formed(self) -> bool:
        return self.years is not None and bool(self.holder)


@dataclass(frozen=True)
class HeaderVerdict:
    license_ok: bool
    copyright_ok: bool
    holder_match: Optional[bool]
    duplicate_notice_found: bool
    sentinel_index: Optional[int] = None
    found_license: Optional[str] = None
    found_notice: Optional[CopyrightNotice] = None
    expected_license: str = ""
    expected_holder: str = ""
    now_year: int = 0

    @property
    def clean(self) -> bool:
        return (
            self.license_ok
            and self.copyright_ok
            and self.holder_match is True
            and not self.duplicate_notice_found
        )

    @property
    def violations(self) -> list[ViolationKind]:
        found: list[ViolationKind] = []
        if not self.license_ok:
            found.append(
                ViolationKind.MISSING_LICENSE
                if self.found_license is None
                else ViolationKind.LICENSE_MISMATCH
            )
        notice = self.found_notice
        if notice is None:
            found.append(ViolationKind.MISSING_COPYRIGHT)
        else:
            if not notice.well_formed:
                found.append(ViolationKind.MALFORMED_COPYRIGHT)
            elif not self.copyright_ok:
                found.append(ViolationKind.STALE_YEAR)
            if self.holder_match is False:
                found.append(ViolationKind.HOLDER_MISMATCH)
        if self.duplicate_notice_found:
            found.append(ViolationKind.DUPLICATE_NOTICE)
        return found

    def messages(self) -> list[str]:
        messages: list[str] = []
        for kind in self.violations:
            if kind == ViolationKind.MISSING_LICENSE:
                messages.append("missing license notice line.")
            elif kind == ViolationKind.LICENSE_MISMATCH:
                messages.append(
                    f"license is wrong: expected '{self.expected_license}',"
                    f" found '{self.found_license}'."
                )
            elif kind == ViolationKind.MISSING_COPYRIGHT:
                messages.append("missing copyright line at the top.")
            elif kind == ViolationKind.MALFORMED_COPYRIGHT:
                messages.append("copyright line has no valid year or holder.")
            elif kind == ViolationKind.HOLDER_MISMATCH and self.found_notice:
                messages.append(
                    f"holder is wrong: expected '{self.expected_holder}',"
                    f" found '{self.found_notice.holder}'."
                )
            elif kind == ViolationKind.STALE_YEAR and self.found_notice:
                years = self.found_notice.years
                end = years.end if years is not None else "?"
                messages.append(
                    f"copyright info ends at {end}, but we are in {self.now_year}."
                )
            elif kind == ViolationKind.DUPLICATE_NOTICE:
                messages.append("duplicate license or copyright lines found.")
        return messages


@dataclass(frozen=True)
class FixResult:
    text: str
    changed: bool


@dataclass(frozen=True)
class FileReport:
    path: Path
    status: FileStatus
    violations: tuple[ViolationKind, ...] = ()
    messages: tuple[str, ...] = ()
    rule: Optional[Rule] = None

    @property
    def failed(self) -> bool:
        return self.status in FAILED_STATUSES

    @property
    def detail(self) -> str:
        return " ".join(self.messages)

    def as_dict(self) -> dict[str, str]:
        return {
            "path": str(self.path),
            "status": self.status.value,
            "detail": self.detail,
        }


@dataclass
class RunReport:
    files: list[FileReport]
    skipped: list[Path] = field(default_factory=list)
    unmatched_patterns: list[str] = field(default_factory=list)
    fix: bool = False
    fail_on_unmatched: bool = False

    @property
    def total(self) -> int:
        return len(self.files)

    def failures(self) -> list[FileReport]:
        return [
            report
            for report in self.files
            if report.failed
            or (self.fail_on_unmatched and report.status == FileStatus.UNMATCHED)
        ]

    @property
    def failed(self) -> bool:
        return bool(self.failures())

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in FileStatus}
        for report in self.files:
            counts[report.status.value] += 1
        counts["files"] = len(self.files)
        counts["skipped"] = len(self.skipped)
        return counts
