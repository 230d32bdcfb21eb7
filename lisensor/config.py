import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Optional

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from jsonschema import Draft202012Validator

from lisensor.constants import CONFIG_FILENAMES, INLINE_ORIGIN
from lisensor.errors import (
    InlineConfigError,
    InvalidConfigSchemaError,
    InvalidTomlFormatError,
    MissingConfigFileError,
)
from lisensor.models import PatternSource

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _schema_error_message(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def validate_config(payload: Any, config_path: Path) -> None:
    if not isinstance(payload, dict):
        raise InvalidConfigSchemaError(config_path, "must be a TOML table")
    validator = Draft202012Validator(load_schema())
    error = next(iter(validator.iter_errors(payload)), None)
    if error is not None:
        raise InvalidConfigSchemaError(config_path, _schema_error_message(error))


class ConfigRepository:
    """One ``holder -> {glob: license}`` TOML file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def config_path(self) -> Path:
        return self._path

    @property
    def base_dir(self) -> Path:
        return self._path.absolute().parent

    def load_payload(self) -> dict[str, dict[str, str]]:
        if not self._path.is_file():
            raise MissingConfigFileError(self._path)
        try:
            payload = tomllib.loads(self._path.read_text(encoding="utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise InvalidTomlFormatError(self._path, str(exc)) from exc
        validate_config(payload, self._path)
        return payload

    def load_sources(self) -> list[PatternSource]:
        payload = self.load_payload()
        origin = str(self._path)
        sources: list[PatternSource] = []
        for holder, table in payload.items():
            for glob, license_id in table.items():
                sources.append(
                    PatternSource(
                        holder=holder,
                        pattern=glob,
                        license=license_id,
                        base_dir=self.base_dir,
                        origin=origin,
                    )
                )
        if not sources:
            logger.warning("config file %s declares no globs", origin)
        return sources


def find_default_config(cwd: Path) -> Optional[Path]:
    for name in CONFIG_FILENAMES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def inline_sources(
    holder: str, license_id: str, globs: Iterable[str], cwd: Path
) -> list[PatternSource]:
    return [
        PatternSource(
            holder=holder,
            pattern=glob,
            license=license_id,
            base_dir=cwd,
            origin=INLINE_ORIGIN,
        )
        for glob in globs
    ]


def load_sources(
    paths: list[str],
    holder: Optional[str] = None,
    license_id: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> list[PatternSource]:
    """Collect pattern sources from config files or from inline arguments.

    With ``holder`` and ``license_id`` set, ``paths`` are globs relative to
    ``cwd``. Otherwise they are config files, defaulting to
    ``Lisensor.toml`` in ``cwd``.
    """
    cwd = cwd or Path.cwd()

    if holder is not None or license_id is not None:
        if holder is None or license_id is None:
            raise InlineConfigError("--holder and --license must be given together")
        default = find_default_config(cwd)
        if default is not None:
            raise InlineConfigError(
                f"--holder or --license cannot be specified when {default.name}"
                " is present in the current directory"
            )
        if not paths:
            raise InlineConfigError("no glob patterns given for inline config")
        return inline_sources(holder, license_id, paths, cwd)

    if not paths:
        default = find_default_config(cwd)
        if default is None:
            raise MissingConfigFileError(cwd / CONFIG_FILENAMES[0])
        paths = [str(default)]

    sources: list[PatternSource] = []
    for path in paths:
        repository = ConfigRepository(Path(path))
        loaded = repository.load_sources()
        logger.info("loaded %d glob(s) from %s", len(loaded), path)
        sources.extend(loaded)
    return sources
