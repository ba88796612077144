import json
import logging
from typing import Optional

import click

from ..app import AppContext
from ..describe import DescribeEngine
from ..errors import DescribeError
from ..models import Absent, DescribeResult, ReleaseMode
from ..tie_breaks import TIE_BREAK_REGISTRY, create_tie_break
from ..utils.output import OutputFormat, format_option, resolve_format

log = logging.getLogger(__name__)


def run_describe(
    app: AppContext,
    prefix: Optional[str],
    release_mode: Optional[str],
    tie_break: Optional[str],
    max_depth: Optional[int],
) -> DescribeResult:
    """Describe the repository of app, with CLI values overriding config."""
    config = app.config.describe

    try:
        graph = app.get_graph()
    except DescribeError as e:
        return Absent(reason=str(e))

    engine = DescribeEngine(
        graph,
        release_mode=ReleaseMode(release_mode) if release_mode else config.release_mode,
        tie_break=create_tie_break(tie_break or config.tie_break),
        max_depth=max_depth if max_depth is not None else config.max_depth,
    )
    return engine.describe_detailed(config.prefix if prefix is None else prefix)


@click.command()
@click.pass_obj
@click.option(
    "--prefix",
    type=str,
    default=None,
    envvar="TAGDESCRIBE_PREFIX",
    help="Only use the nearest tag if its name starts with this prefix.",
)
@click.option(
    "--release-mode",
    type=click.Choice([mode.value for mode in ReleaseMode]),
    default=None,
    envvar="TAGDESCRIBE_RELEASE_MODE",
    help="In release-branch mode, an exact '.0' tag still gets the long form.",
)
@click.option(
    "--tie-break",
    type=click.Choice(sorted(TIE_BREAK_REGISTRY)),
    default=None,
    help="Policy for choosing among several tags on one commit.",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=None,
    help="Stop searching for tags after this many first-parent commits.",
)
@click.option(
    "--allow-missing",
    is_flag=True,
    default=False,
    help="Exit successfully with no output if no version can be determined.",
)
@format_option()
def describe(
    app: AppContext,
    prefix: Optional[str],
    release_mode: Optional[str],
    tie_break: Optional[str],
    max_depth: Optional[int],
    allow_missing: bool,
    format: str,
    json_flag: bool,
):
    """Print a version string for HEAD based on the nearest tag.

    Follows first-parent history only. Prints TAG for an exact match,
    TAG-N-gHASH when HEAD is N commits past TAG, or the abbreviated HEAD
    hash when no matching tag is found.
    """
    result = run_describe(app, prefix, release_mode, tie_break, max_depth)
    output_format = resolve_format(format, json_flag)

    if output_format == OutputFormat.JSON:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.ok:
        click.echo(result.value)

    if not result.ok:
        if allow_missing:
            log.debug(f"No version determined: {result.reason}")
            return
        if output_format == OutputFormat.TEXT:
            click.echo(f"Error: could not describe HEAD: {result.reason}", err=True)
        raise SystemExit(1)
