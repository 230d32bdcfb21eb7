from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lisensor.models import PatternConflict


class LisensorError(Exception):
    """Base user-facing application error."""


class ConfigError(LisensorError):
    """Configuration problem that aborts the run before any file is touched."""


class ConfigFileError(ConfigError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingConfigFileError(ConfigFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing config file")


class InvalidTomlFormatError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid TOML format ({detail})")


class InvalidConfigSchemaError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class InlineConfigError(ConfigError):
    pass


class PatternConflictError(ConfigError):
    def __init__(self, conflicts: "list[PatternConflict]") -> None:
        self.conflicts = conflicts
        lines = [f"conflicting config detected for {len(conflicts)} glob(s):"]
        for conflict in conflicts:
            lines.append(f"- {conflict.describe()}")
        super().__init__("\n".join(lines))


class FixRefusedError(LisensorError):
    def __init__(
        self, found_holder: str, expected_holder: str, path: Path | None = None
    ) -> None:
        self.found_holder = found_holder
        self.expected_holder = expected_holder
        self.path = path
        where = f" in {path}" if path is not None else ""
        super().__init__(
            f"refusing to overwrite copyright of '{found_holder}'{where}"
            f" (expected holder '{expected_holder}')"
        )
