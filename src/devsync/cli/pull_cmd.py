"""CLI pull command: devsync pull."""

from __future__ import annotations

from pathlib import Path

import click

from devsync.cli.common import config_option, load_cli_config, setup_logging, verbose_option


@click.command("pull")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for fetched articles (default: articles).",
)
@click.option(
    "--per-page",
    type=click.IntRange(min=1, max=1000),
    default=None,
    help="Articles requested per page (default: 100).",
)
@click.option(
    "--keep-going",
    is_flag=True,
    help="Record articles without a date line and continue instead of aborting.",
)
@config_option
@verbose_option
def pull_cmd(
    output_dir: Path | None,
    per_page: int | None,
    keep_going: bool,
    config_file: Path | None,
    verbose: bool,
) -> None:
    """Download all of your dev.to articles as dated markdown files.

    Each article is written to <output-dir>/<date>_<id>.md, with the date
    taken from the first '###### YYYY-MM-DD' line of its body.
    Reads the API key from DEVTO_API_KEY.
    """
    setup_logging(verbose)
    config = load_cli_config(config_file)

    from devsync.core.config import resolve_api_key
    from devsync.sync.api import ArticleAPI
    from devsync.sync.errors import DevSyncError
    from devsync.sync.fetcher import Fetcher

    pull_cfg = config.get("pull", {})
    api_cfg = config.get("api", {})

    try:
        api_key = resolve_api_key(config)
        with ArticleAPI(
            api_key,
            base_url=api_cfg.get("base_url", "https://dev.to/api"),
            timeout=float(api_cfg.get("timeout", 30.0)),
        ) as api:
            fetcher = Fetcher(
                api,
                output_dir=output_dir or Path(pull_cfg.get("output_dir", "articles")),
                per_page=per_page or int(pull_cfg.get("per_page", 100)),
                fail_fast=not keep_going and bool(pull_cfg.get("fail_fast", True)),
                progress=click.echo,
            )
            result = fetcher.run()
    except DevSyncError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"File error: {e}") from e
    except KeyboardInterrupt:
        click.echo("\nPull cancelled.")
        raise SystemExit(130) from None

    click.echo(f"Exported {len(result.written)} of {result.fetched} articles.")
    if result.errors:
        click.echo(f"\n{len(result.errors)} articles failed:")
        for article_id, message in result.errors:
            click.echo(f"  - {article_id}: {message}")
        raise SystemExit(1)
