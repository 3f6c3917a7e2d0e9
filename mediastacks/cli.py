"""Terminal front-end for searching catalogs and curating favorites.

Search results are kept as structured :class:`MediaItem` objects between
rendering and the ``--add`` action, so a saved favorite is exactly what the
provider returned (``raw`` payload included) rather than a copy re-read from
the rendered table.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import httpx
from rich.console import Console
from rich.table import Table

from mediastacks.cache import close_redis
from mediastacks.errors import FavoritesError, MediaStacksError, UpstreamError
from mediastacks.providers.registry import PROVIDERS, AdapterRegistry
from mediastacks.schemas.favorites import FavoritesCollection
from mediastacks.schemas.media import MEDIA_TYPES, MediaItem
from mediastacks.services.favorites import FavoritesStore, build_storage
from mediastacks.services.search_service import SearchService
from mediastacks.settings import DEFAULT_PORT, AppSettings, get_settings

console = Console()


def render_items(items: Sequence[MediaItem], *, title: str | None = None) -> Table:
    """Build a numbered table of items; numbering starts at 1."""

    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Subtitle")
    table.add_column("ID", style="dim")
    table.add_column("Image", style="dim", overflow="fold")
    for index, item in enumerate(items, start=1):
        table.add_row(
            str(index), item.title, item.subtitle, item.id, item.image or "No image"
        )
    return table


def render_favorites(collection: FavoritesCollection, out: Console) -> None:
    for media_type in MEDIA_TYPES:
        items = collection.items_for(media_type)
        if not items:
            out.print(f"[dim]No {media_type} favorites yet.[/dim]")
            continue
        out.print(render_items(items, title=f"{media_type.capitalize()} favorites"))


async def add_favorite(store: FavoritesStore, item: MediaItem, out: Console) -> bool:
    """Save ``item`` and report the outcome; returns ``False`` on rejection."""

    try:
        await store.add(item)
    except FavoritesError as exc:
        out.print(f"[yellow]{exc.message}[/yellow]")
        return False
    out.print(f"[green]Added to {item.type} favorites.[/green]")
    return True


async def run_search(
    service: SearchService,
    store: FavoritesStore,
    category: str,
    query: str,
    *,
    add_index: int | None = None,
    out: Console = console,
) -> int:
    """Search, render the results and optionally save one of them."""

    if not query.strip():
        out.print("Type something to search.")
        return 1

    out.print("Searching...")
    try:
        response = await service.handle(category, query)
    except UpstreamError as exc:
        out.print(f"[red]Search failed: {exc.message}[/red]")
        return 1
    except MediaStacksError as exc:
        out.print(f"[red]{exc.message}[/red]")
        return 1

    items = response.items
    if not items:
        out.print("No results.")
        return 0

    out.print(render_items(items))
    out.print(f"Showing {len(items)} result(s).")

    if add_index is None:
        return 0
    if not 1 <= add_index <= len(items):
        out.print(f"[red]Pick a result between 1 and {len(items)}.[/red]")
        return 1
    return 0 if await add_favorite(store, items[add_index - 1], out) else 1


async def run_favorites(
    store: FavoritesStore,
    action: str,
    *,
    media_type: str | None = None,
    item_id: str | None = None,
    out: Console = console,
) -> int:
    if action == "clear":
        await store.clear()
        out.print("Cleared all favorites.")
        return 0
    if action == "remove":
        collection = await store.remove(media_type, item_id)
        render_favorites(collection, out)
        return 0
    render_favorites(await store.load(), out)
    return 0


async def _dispatch(args: argparse.Namespace, settings: AppSettings) -> int:
    try:
        store = FavoritesStore(await build_storage(settings))
        if args.command != "search":
            return await run_favorites(
                store,
                args.action,
                media_type=getattr(args, "media_type", None),
                item_id=getattr(args, "item_id", None),
            )
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(settings.upstream_timeout_seconds)
        ) as http_client:
            registry = AdapterRegistry.from_settings(settings, http_client)
            return await run_search(
                SearchService(registry),
                store,
                args.category,
                " ".join(args.query),
                add_index=args.add,
            )
    finally:
        await close_redis()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mediastacks",
        description="Search movies, books and albums and keep a short favorites list.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Search one catalog")
    search.add_argument("category", choices=sorted(PROVIDERS))
    search.add_argument("query", nargs="+", help="Free-text query")
    search.add_argument(
        "--add",
        type=int,
        metavar="N",
        help="Save the N-th result (1-based) to favorites",
    )

    favorites = commands.add_parser("favorites", help="Show or edit favorites")
    actions = favorites.add_subparsers(dest="action")
    actions.add_parser("list", help="Show all favorites")
    remove = actions.add_parser("remove", help="Remove one favorite")
    remove.add_argument("media_type", choices=MEDIA_TYPES)
    remove.add_argument("item_id")
    actions.add_parser("clear", help="Remove every favorite")

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=DEFAULT_PORT)
    serve.add_argument("--reload", action="store_true")

    args = parser.parse_args(argv)
    if args.command == "favorites" and args.action is None:
        args.action = "list"
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run(
            "mediastacks.main:app", host=args.host, port=args.port, reload=args.reload
        )
        return 0

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level_numeric,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return asyncio.run(_dispatch(args, settings))


__all__ = [
    "add_favorite",
    "main",
    "parse_args",
    "render_favorites",
    "render_items",
    "run_favorites",
    "run_search",
]


if __name__ == "__main__":
    sys.exit(main())
