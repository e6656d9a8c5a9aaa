import argparse
from dataclasses import dataclass
from pathlib import Path


# ===--- Expansion config contracts ---=== #

VALID_ERROR_CODES = {
    "PATH_NOT_FOUND",
    "INVALID_INDENT",
    "OUTPUT_NOT_WRITABLE",
}
MAX_INDENT = 8


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


@dataclass(frozen=True)
class ExpansionConfig:
    validate_fields: bool = True
    color: bool = True
    verbose: bool = False
    indent: int = 4

    def __post_init__(self):
        validate_indent(self.indent)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "ExpansionConfig":
        return cls(
            validate_fields=not getattr(args, "allow_missing_fields", False),
            color=not getattr(args, "no_color", False),
            verbose=getattr(args, "verbose", False),
            indent=getattr(args, "indent", 4),
        )


def validate_indent(indent: object) -> int:
    if isinstance(indent, bool) or not isinstance(indent, int) or not 1 <= indent <= MAX_INDENT:
        raise ConfigError(
            "INVALID_INDENT",
            f"Invalid indent width: {indent!r}",
            f"Use a whole number of spaces between 1 and {MAX_INDENT}.",
        )
    return indent


def validate_path_exists(path: Path | None, flag: str, suggestion: str | None = None) -> Path:
    if path is None:
        raise ConfigError(
            "PATH_NOT_FOUND",
            f"{flag} is required: no path provided.",
            suggestion or f"Pass the path explicitly: {flag} /path/to/file.rs",
        )
    if path.is_file():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        suggestion or "Provide an existing source file.",
    )


def write_output(path: Path, text: str) -> Path:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            "OUTPUT_NOT_WRITABLE",
            f"Cannot write output file {path}: {exc.strerror or exc}",
            "Check that the parent directory exists and is writable.",
        ) from exc
    return path
