"""CLI push command: devsync push."""

from __future__ import annotations

from pathlib import Path

import click

from devsync.cli.common import config_option, load_cli_config, setup_logging, verbose_option


@click.command("push")
@click.argument("files", nargs=-1, type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--publish",
    is_flag=True,
    help="Actually post the articles (default is a dry-run).",
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait after each published article (default: 5).",
)
@click.option(
    "--keep-going",
    is_flag=True,
    help="Record failing files and continue instead of aborting the batch.",
)
@config_option
@verbose_option
def push_cmd(
    files: tuple[Path, ...],
    publish: bool,
    delay: float | None,
    keep_going: bool,
    config_file: Path | None,
    verbose: bool,
) -> None:
    """Post local markdown files to dev.to and rename them with their new id.

    Only .md arguments are considered; files whose front matter already has
    an id are skipped. Without --publish nothing is sent or changed.

    \b
    Usage:
      devsync push drafts/*.md
      devsync push --publish drafts/*.md
    """
    setup_logging(verbose)
    config = load_cli_config(config_file)

    from devsync.core.config import resolve_api_key
    from devsync.sync.api import ArticleAPI
    from devsync.sync.errors import DevSyncError
    from devsync.sync.pacing import pacing_from_config
    from devsync.sync.publisher import Publisher, select_files

    push_cfg = config.get("push", {})
    api_cfg = config.get("api", {})
    fail_fast = not keep_going and bool(push_cfg.get("fail_fast", True))

    if not select_files(files):
        click.echo("No .md files given.")
        return

    api = None
    try:
        if publish:
            api = ArticleAPI(
                resolve_api_key(config),
                base_url=api_cfg.get("base_url", "https://dev.to/api"),
                timeout=float(api_cfg.get("timeout", 30.0)),
            )
        publisher = Publisher(
            api,
            dry_run=not publish,
            pacing=pacing_from_config(config, delay),
            fail_fast=fail_fast,
            progress=click.echo,
        )
        result = publisher.run(files)
    except DevSyncError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"File error: {e}") from e
    except KeyboardInterrupt:
        click.echo("\nPush cancelled.")
        raise SystemExit(130) from None
    finally:
        if api is not None:
            api.close()

    if result.dry_run:
        click.echo(
            f"\nDry-run: {len(result.planned)} to post, {len(result.skipped)} skipped. "
            "Re-run with --publish to post."
        )
    else:
        click.echo(
            f"\nPublished {len(result.published)}, skipped {len(result.skipped)}."
        )
    if result.errors:
        click.echo(f"\n{len(result.errors)} files failed:")
        for path, message in result.errors:
            click.echo(f"  - {path}: {message}")
        raise SystemExit(1)
