from pathlib import Path
from typing import Optional

from lisensor.constants import HASH_EXTENSIONS, SLASH_EXTENSIONS
from lisensor.models import CommentStyle


_STYLE_BY_EXTENSION: dict[str, CommentStyle] = {
    **{ext: CommentStyle.SLASH_SLASH for ext in SLASH_EXTENSIONS},
    **{ext: CommentStyle.HASH for ext in HASH_EXTENSIONS},
}


def style_for(path: Path | str) -> Optional[CommentStyle]:
    """Return the line-comment style for ``path``, or ``None`` when unsupported."""
    suffix = Path(path).suffix
    if not suffix:
        return None
    return _STYLE_BY_EXTENSION.get(suffix[1:].lower())


def is_supported(path: Path | str) -> bool:
    return style_for(path) is not None
