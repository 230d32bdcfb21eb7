from typing import Optional

from rich.console import RenderableType
from rich.panel import Panel

from lisensor.tui.enums import UIStyle


class UISection:
    @staticmethod
    def wrap(
        title: str,
        body: RenderableType,
        style: str = UIStyle.BLUE.value,
        subtitle: Optional[str] = None,
    ) -> Panel:
        return Panel(
            body,
            title=title,
            subtitle=subtitle,
            subtitle_align="right",
            border_style=style,
            padding=(0, 1),
        )

    @staticmethod
    def note(title: str, body: str, style: str) -> Panel:
        return UISection.wrap(title, body, style=style)
