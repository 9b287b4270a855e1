"""chatlog CLI — main entry point and shared utilities."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import click
from rich.console import Console

from chatlog.config import Settings, get_settings
from chatlog.core.errors import (
    DocumentNotFound,
    RecordIOError,
    StoreUnavailable,
    UnknownFolder,
)
from chatlog.library import Library

console = Console()

T = TypeVar("T")


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def run_with_library(ctx: click.Context, action: Callable[[Library], Awaitable[T]]) -> T:
    """Open the library, run ``action`` against it, and close it again.

    Maps chatlog errors to exit codes: 2 when the store cannot be opened,
    1 for anything the user asked for that could not be done.
    """
    settings: Settings = ctx.obj["settings"]

    async def _run() -> T:
        library = await Library.open(settings)
        try:
            return await action(library)
        finally:
            await library.close()

    try:
        return asyncio.run(_run())
    except StoreUnavailable as e:
        console.print(f"[red]Store unavailable:[/red] {e}")
        raise SystemExit(2) from e
    except (DocumentNotFound, UnknownFolder, RecordIOError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1) from e


def resolve_document_id(library: Library, ref: str) -> str:
    """Accept a full document id or a unique prefix of one."""
    ids = [doc.id for doc in library.documents]
    if ref in ids:
        return ref
    matches = [doc_id for doc_id in ids if doc_id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    raise DocumentNotFound(ref)


@click.group()
@click.option(
    "--storage-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Override storage directory (default: $CHATLOG_STORAGE_DIR or ./.chatlog)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, storage_dir: Path | None, verbose: bool) -> None:
    """chatlog — read AI chat transcripts as question/answer exchanges."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = Settings(storage_dir=storage_dir) if storage_dir else get_settings()


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from chatlog.cli.document_commands import (  # noqa: E402
    assign,
    delete_document,
    import_files,
    list_documents,
    show_document,
)
from chatlog.cli.folder_commands import folders  # noqa: E402

main.add_command(import_files, name="import")
main.add_command(list_documents, name="list")
main.add_command(show_document, name="show")
main.add_command(delete_document, name="delete")
main.add_command(assign)
main.add_command(folders)
