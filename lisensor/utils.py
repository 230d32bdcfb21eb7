import os
import shutil
import tempfile
from pathlib import Path

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def read_source(path: Path) -> str:
    return path.read_bytes().decode(TEXT_ENCODING, errors=TEXT_ERRORS)


def write_source(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` in one step; the old file stays on failure."""
    payload = text.encode(TEXT_ENCODING, errors=TEXT_ERRORS)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        shutil.copymode(path, temp_name)
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise


def is_regular_file(path: Path) -> bool:
    return path.is_file() and not path.is_symlink()


def display_path(path: str | Path, root: Path | None = None) -> str:
    base = root or Path.cwd()
    try:
        return str(Path(path).relative_to(base))
    except ValueError:
        return str(path)
