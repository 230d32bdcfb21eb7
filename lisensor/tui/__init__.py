from lisensor.tui.renderers import LicenseConsoleUI

__all__ = ["LicenseConsoleUI"]
