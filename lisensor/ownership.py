from pathlib import Path

from lisensor.glob_index import GlobIndex
from lisensor.models import (
    ConflictingCoverage,
    FileOwnership,
    Resolved,
    Rule,
    Unmatched,
)


class OwnershipResolver:
    def __init__(self, index: GlobIndex) -> None:
        self.index = index

    def resolve(self, path: Path | str) -> FileOwnership:
        matches = self.index.match(path)
        distinct: dict[tuple[str, str], Rule] = {}
        for rule in sorted(matches, key=Rule.sort_key):
            distinct.setdefault(rule.key, rule)

        if not distinct:
            return Unmatched()
        if len(distinct) == 1:
            return Resolved(rule=next(iter(distinct.values())))
        return ConflictingCoverage(rules=tuple(sorted(matches, key=Rule.sort_key)))
