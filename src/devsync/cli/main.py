"""CLI entry point for devsync."""

import click

from devsync import __version__
from devsync.cli.pull_cmd import pull_cmd
from devsync.cli.push_cmd import push_cmd


@click.group()
@click.version_option(version=__version__, prog_name="devsync")
def cli() -> None:
    """devsync — keep local markdown files in step with dev.to articles."""


cli.add_command(pull_cmd)
cli.add_command(push_cmd)


if __name__ == "__main__":
    cli()
