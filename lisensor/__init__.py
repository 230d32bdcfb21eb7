"""Check and fix SPDX license headers across a source tree."""

__version__ = "0.1.0"
