import click
import uvicorn
import logging
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from .config import Config, init_config
from .models import AnchorState, Page
from .repository import ArticleRepository
from .pager import Pager
from .paging import InvalidArgumentError
from .api import create_api

# Set up logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Set up rich console
console = Console()


def page_table(page: Page) -> Table:
    """Render a page of articles as a rich table."""
    table = Table(show_header=True, header_style="bold magenta", box=box.ROUNDED)
    table.row_styles = ["none", "on dark_green"]

    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Description", style="dim")
    table.add_column("Created", width=12)

    for article in page.records:
        table.add_row(
            str(article.id),
            article.title,
            article.description,
            article.created_at.strftime("%Y-%m-%d")
        )

    return table


def page_summary(page: Page) -> Table:
    summary_table = Table(show_header=False, box=box.SIMPLE)
    summary_table.add_column("Key", style="cyan")
    summary_table.add_column("Value")

    summary_table.add_row("Articles", f"{page.first_key}..{page.last_key}")
    summary_table.add_row("Previous key", "[dim]none[/dim]" if page.prev_key is None else str(page.prev_key))
    summary_table.add_row("Next key", str(page.next_key))
    return summary_table


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to the configuration file")
@click.option("--debug/--no-debug", default=False, help="Enable debug output")
@click.pass_context
def cli(ctx, config_path, debug):
    """articlefeed - browse an unbounded synthetic article feed page by page."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Create a config object and add it to context
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config(config_path)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.pass_context
def init(ctx):
    """Initialize configuration file."""
    init_config(ctx.obj["config_path"])

    console.print(Panel.fit(
        "[bold green]articlefeed initialized successfully[/bold green]",
        border_style="green"
    ))


@cli.command()
@click.option("--key", type=click.IntRange(min=0), default=None, help="First key of the page")
@click.option("--page-size", type=int, default=None, help="Number of articles per page")
@click.pass_context
def page(ctx, key, page_size):
    """Show a single page of articles."""
    config = ctx.obj["config"]
    if page_size is None:
        page_size = config.page_size

    repository = ArticleRepository(config.epoch)
    source = repository.article_paging_source()

    try:
        result = source.fetch_page(key, page_size)
    except InvalidArgumentError as e:
        click.echo(f"Error loading page: {str(e)}", err=True)
        ctx.exit(1)

    console.print(page_table(result))
    console.print(page_summary(result))


@cli.command()
@click.option("--pages", type=click.IntRange(min=1), default=3, help="Number of pages to load")
@click.option("--page-size", type=int, default=None, help="Number of articles per page")
@click.option("--invalidate-at", type=click.IntRange(min=0), default=None,
              help="Invalidate after loading, anchored at this item position")
@click.pass_context
def browse(ctx, pages, page_size, invalidate_at):
    """Scroll forward through the feed, optionally invalidating at the end."""
    config = ctx.obj["config"]
    if page_size is None:
        page_size = config.page_size

    repository = ArticleRepository(config.epoch)

    try:
        pager = Pager(repository.article_paging_source, page_size=page_size, max_pages=config.max_pages)
    except InvalidArgumentError as e:
        click.echo(f"Error creating pager: {str(e)}", err=True)
        ctx.exit(1)

    loaded = pager.refresh()
    click.echo(f"Loaded articles {loaded.first_key}..{loaded.last_key}")
    for _ in range(pages - 1):
        loaded = pager.append()
        click.echo(f"Loaded articles {loaded.first_key}..{loaded.last_key}")

    click.echo(f"Retained {len(pager.pages)} pages, {len(pager.items)} articles")

    if invalidate_at is not None:
        refresh_key = pager.invalidate(invalidate_at)
        click.echo(f"Invalidated at position {invalidate_at}, refreshing from key {refresh_key}")
        loaded = pager.refresh()
        console.print(page_summary(loaded))


@cli.command("refresh-key")
@click.argument("anchor_key", type=click.IntRange(min=0))
@click.option("--page-size", type=int, default=None, help="Number of articles per page")
@click.pass_context
def refresh_key(ctx, anchor_key, page_size):
    """Compute the reload key for an article the reader was viewing."""
    config = ctx.obj["config"]
    if page_size is None:
        page_size = config.page_size

    source = ArticleRepository(config.epoch).article_paging_source()
    key = source.compute_refresh_key(AnchorState(anchor_key=anchor_key, page_size=page_size))
    click.echo(f"Refresh key: {key}")


@cli.command()
@click.option("--port", type=int, default=None, help="Port to run the API server on")
@click.option("--host", type=str, default=None, help="Host to bind the API server to")
@click.pass_context
def serve(ctx, port, host):
    """Start the article feed API service."""
    config = ctx.obj["config"]
    if host is None:
        host = config.api_host
    if port is None:
        port = config.api_port

    # Create the FastAPI app
    app = create_api(config)

    click.echo(f"Starting articlefeed API on http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")
    logger.info(f"Serving pages of {config.page_size} articles")

    # Run uvicorn server
    uvicorn.run(app, host=host, port=port)


@cli.command()
@click.pass_context
def show_config(ctx):
    """Show current configuration."""
    config = ctx.obj["config"]

    console.print(Panel.fit(
        "[bold blue]articlefeed Configuration[/bold blue]",
        border_style="blue"
    ))

    config_table = Table(show_header=False, box=box.SIMPLE)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value")

    config_table.add_row("Config path", config.config_path)
    config_table.add_row("Page size", str(config.page_size))
    config_table.add_row("Max page size", str(config.max_page_size))
    config_table.add_row("Max retained pages", str(config.max_pages) if config.max_pages else "unlimited")
    config_table.add_row("Epoch", config.epoch.isoformat() if config.epoch else "[dim]time of first load[/dim]")
    config_table.add_row("API server", f"{config.api_host}:{config.api_port}")

    console.print(config_table)


if __name__ == "__main__":
    cli()
