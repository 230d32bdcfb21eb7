from enum import Enum

from lisensor.models import FileStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


FILE_STATUS_STYLE = {
    FileStatus.CLEAN: UIStyle.DIM.value,
    FileStatus.FIXED: UIStyle.GREEN.value,
    FileStatus.VIOLATIONS: UIStyle.YELLOW.value,
    FileStatus.UNMATCHED: UIStyle.CYAN.value,
    FileStatus.FIX_REFUSED: UIStyle.RED.value,
    FileStatus.CONFLICTING_COVERAGE: UIStyle.MAGENTA.value,
    FileStatus.ERROR: UIStyle.RED.value,
}
