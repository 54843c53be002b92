import asyncio
import logging
import sys

import click

from .clients import create_client
from .config import get_venddy_config
from .data_models.config import VenddyConfig
from .data_models.presentation import MenuElement, OptionElement, sorted_elements
from .services import SearchSession
from .taxonomy import TaxonomyCache
from .version import __version__


class ConsolePresenter:
    """Presenter that prints menus and documents to the terminal."""

    def __init__(self) -> None:
        self.elements: dict[str, MenuElement] = {}

    async def show_menu(self, label: str, elements: dict[str, MenuElement]) -> None:
        self.elements = elements
        click.echo(click.style(label, bold=True))
        for key, element in sorted_elements(elements):
            if isinstance(element, OptionElement):
                choice = str(int(key) + 1) if key.isdigit() else key
                click.echo(f"  [{choice}] {element.label}")
            else:
                click.echo(element.body)

    async def show_document(self, label: str, markdown: str) -> None:
        click.echo(click.style(label, bold=True))
        click.echo(markdown)

    def option_for(self, choice: str) -> OptionElement | None:
        """Maps a typed choice (1-based entry number, 'next' or 'prev') to an option."""
        key = str(int(choice) - 1) if choice.isdigit() else choice
        element = self.elements.get(key)
        return element if isinstance(element, OptionElement) else None


async def _interactive_search(
    config: VenddyConfig, query: str, page_size: int | None
) -> None:
    presenter = ConsolePresenter()
    async with create_client(config) as client:
        session = SearchSession(
            client,
            presenter,
            query,
            page_size=page_size or config.page_size,
            taxonomy_cache=TaxonomyCache(ttl=config.taxonomy_cache_ttl),
        )
        await session.start()
        while True:
            choice = await asyncio.to_thread(
                click.prompt, "Select an entry, next, prev or q", default="q"
            )
            choice = choice.strip().lower()
            if choice in ("q", "quit"):
                return
            option = presenter.option_for(choice)
            if option is None or option.on_select is None:
                click.echo(f"'{choice}' is not one of the listed options.", err=True)
                continue
            await option.on_select()


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Venddy Search CLI - browse the Venddy vendor directory."""
    logging.basicConfig(level=logging.INFO)


@cli.command()
@click.argument("query", nargs=-1, required=True)
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    default=None,
    help="Vendors per page (defaults to VENDDY_PAGE_SIZE or 10).",
)
def search(query: tuple[str, ...], page_size: int | None) -> None:
    """Search vendors and browse the results page by page."""
    try:
        config = get_venddy_config()
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    asyncio.run(_interactive_search(config, " ".join(query), page_size))


def main() -> None:
    """Main entry point for the CLI."""
    cli()
