import json
from collections import defaultdict
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ..app import AppContext
from ..errors import DescribeError
from ..models import CommitId, TagRef
from ..tag_index import TagIndexBuilder
from ..tie_breaks import TIE_BREAK_REGISTRY, TagTieBreak, create_tie_break
from ..utils.output import OutputFormat, format_option, resolve_format


def group_tags_by_target(
    builder: TagIndexBuilder, prefix: str = ""
) -> dict[CommitId, list[TagRef]]:
    """Return tags grouped by target, best first.

    The tie-break runs over every tag on a target before the prefix is
    checked, and a group is kept only if its winner starts with prefix.
    This is the same order describe uses, so a losing tag that matches the
    prefix never stands in for a winner that does not.
    """
    groups: dict[CommitId, list[TagRef]] = defaultdict(list)
    for candidate in builder.graph.list_tag_references():
        tag = builder.resolve(candidate)
        groups[tag.target].append(tag)

    ranked = {target: builder.tie_break.sort(tags) for target, tags in groups.items()}
    return {
        target: tags
        for target, tags in ranked.items()
        if tags[0].name.startswith(prefix)
    }


def _tag_kind(tag: TagRef) -> str:
    return "annotated" if tag.annotated else "lightweight"


def _print_table(groups: dict[CommitId, list[TagRef]], abbrev, tie_break: TagTieBreak):
    table = Table(title=f"Tags by target (tie-break: {tie_break.name})")
    table.add_column("Target")
    table.add_column("Tag")
    table.add_column("Kind")
    table.add_column("Also on target", style="dim")

    for target, tags in sorted(groups.items(), key=lambda item: item[1][0].name):
        winner = tags[0]
        others = ", ".join(tag.name for tag in tags[1:])
        table.add_row(abbrev(target), winner.name, _tag_kind(winner), others)

    Console().print(table)


@click.command()
@click.pass_obj
@click.option(
    "--prefix",
    type=str,
    default=None,
    envvar="TAGDESCRIBE_PREFIX",
    help="Only list tags whose names start with this prefix.",
)
@click.option(
    "--tie-break",
    type=click.Choice(sorted(TIE_BREAK_REGISTRY)),
    default=None,
    help="Policy for choosing among several tags on one commit.",
)
@format_option()
def tags(
    app: AppContext,
    prefix: Optional[str],
    tie_break: Optional[str],
    format: str,
    json_flag: bool,
):
    """List tagged commits and the tag describe would pick for each."""
    policy = create_tie_break(tie_break or app.config.describe.tie_break)
    if prefix is None:
        prefix = app.config.describe.prefix

    try:
        graph = app.get_graph()
        groups = group_tags_by_target(TagIndexBuilder(graph, policy), prefix)
        if resolve_format(format, json_flag) == OutputFormat.JSON:
            data = [
                {
                    "target": target,
                    "tag": group[0].name,
                    "annotated": group[0].annotated,
                    "others": [tag.name for tag in group[1:]],
                }
                for target, group in sorted(groups.items(), key=lambda item: item[1][0].name)
            ]
            click.echo(json.dumps(data, indent=2))
        else:
            _print_table(groups, graph.abbreviate, policy)
    except DescribeError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
