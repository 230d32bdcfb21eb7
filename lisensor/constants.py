from typing import Final


CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    "Lisensor.toml",
    "lisensor.toml",
)
INLINE_ORIGIN: Final[str] = "<inline>"

LICENSE_MARKER: Final[str] = "SPDX-License-Identifier: "
COPYRIGHT_MARKER: Final[str] = "Copyright (c) "
SENTINEL: Final[str] = "* * * * *"

# sorted; looked up by lower-cased extension
HASH_EXTENSIONS: Final[tuple[str, ...]] = (
    "bash",
    "ini",
    "mk",
    "php",
    "phtml",
    "pl",
    "pm",
    "ps1",
    "psd1",
    "psm1",
    "py",
    "r",
    "rb",
    "sh",
    "tcl",
    "toml",
    "yaml",
    "yml",
    "zsh",
)

SLASH_EXTENSIONS: Final[tuple[str, ...]] = (
    "c",
    "cc",
    "cjs",
    "cpp",
    "cs",
    "cts",
    "cxx",
    "dart",
    "fs",
    "glsl",
    "go",
    "gradle",
    "groovy",
    "h",
    "hh",
    "hlsl",
    "hpp",
    "hxx",
    "java",
    "js",
    "jsonc",
    "jsx",
    "kt",
    "kts",
    "less",
    "mjs",
    "mts",
    "proto",
    "rs",
    "scala",
    "scss",
    "sol",
    "sv",
    "swift",
    "ts",
    "tsx",
    "v",
    "wgsl",
    "zig",
)
