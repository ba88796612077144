"""Output format utilities for tagdescribe CLI commands."""

from enum import Enum
from typing import Callable
import click


class OutputFormat(str, Enum):
    """Supported output formats for CLI commands."""

    TEXT = "text"
    JSON = "json"


def format_option(default: OutputFormat = OutputFormat.TEXT) -> Callable:
    """Create a Click option decorator for output format selection.

    Provides --format with choices text and json, plus a --json alias. The
    command receives `format` and `json_flag`; pass both to resolve_format().

    Example:
        @click.command()
        @format_option()
        def my_command(format: str, json_flag: bool):
            fmt = resolve_format(format, json_flag)
    """

    def decorator(func: Callable) -> Callable:
        func = click.option(
            "--format",
            "format",
            type=click.Choice([f.value for f in OutputFormat]),
            default=default.value,
            help=f"Output format (default: {default.value}).",
            show_default=False,
        )(func)

        func = click.option(
            "--json",
            "json_flag",
            is_flag=True,
            default=False,
            help="Output in JSON format (alias for --format json).",
        )(func)

        return func

    return decorator


def resolve_format(format: str, json_flag: bool) -> OutputFormat:
    if json_flag:
        return OutputFormat.JSON
    return OutputFormat(format)
