import click
import logging
from typing import Optional

import yaml
from dotenv import load_dotenv

from .app import AppContext
from .version import get_version

LOG_FORMAT = "[%(levelname)s] %(message)s"

load_dotenv()


@click.group()
@click.version_option(version=get_version(), prog_name="tagdescribe")
@click.pass_obj
@click.option(
    "--repo-path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    default=".",
    help="Path inside the git repository to describe.",
)
@click.option(
    "--config",
    "config_path",
    type=str,
    default=None,
    help="Path to the config file (default: .tagdescribe.yaml if present).",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
def cli(app: AppContext, repo_path: str, config_path: Optional[str], verbose: bool):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    app.repo_path = repo_path
    try:
        app.load_config(config_path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def register_commands(cli):
    from .commands.describe import describe

    cli.add_command(describe)

    from .commands.tags import tags

    cli.add_command(tags)


register_commands(cli)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
    )
    cli(obj=AppContext())


if __name__ == "__main__":
    main()
