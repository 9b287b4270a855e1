"""Document commands — chatlog import, list, show, delete, assign."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click
from rich import box
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from chatlog.cli.main import console, resolve_document_id, run_with_library
from chatlog.core.models import Document
from chatlog.library import Library
from chatlog.services.catalog import FolderFilter
from chatlog.transcript.parser import outline


def _format_date(added_at: int) -> str:
    return datetime.fromtimestamp(added_at / 1000).strftime("%Y/%m/%d")


@click.command("import")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def import_files(ctx: click.Context, files: tuple[Path, ...]):
    """Import transcript files (.md, .markdown, .txt) as documents.

    Files are imported in the order given.
    """

    async def action(library: Library) -> list[Document]:
        return await library.import_files(files)

    imported = run_with_library(ctx, action)
    for doc in imported:
        console.print(f"[green]Imported:[/green] {doc.name} [dim]({doc.id[:8]})[/dim]")


@click.command("list")
@click.option("--folder", "folder", default=None, help="Only documents in this folder")
@click.option("--uncategorized", is_flag=True, help="Only documents without a folder")
@click.option("--search", "-s", "query", default="", help="Case-insensitive text search")
@click.pass_context
def list_documents(ctx: click.Context, folder: str | None, uncategorized: bool, query: str):
    """List documents, newest first."""
    if folder is not None and uncategorized:
        raise click.UsageError("--folder and --uncategorized are mutually exclusive")

    if uncategorized:
        folder_filter = FolderFilter.uncategorized()
    elif folder is not None:
        folder_filter = FolderFilter.named(folder)
    else:
        folder_filter = FolderFilter.all()

    async def action(library: Library):
        library.set_folder_filter(folder_filter)
        return [library.summarize(doc) for doc in library.set_search(query)]

    summaries = run_with_library(ctx, action)
    if not summaries:
        console.print("[dim]No documents found.[/dim]")
        return

    table = Table(box=box.ROUNDED, show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Added", no_wrap=True)
    table.add_column("Exchanges", justify="right")
    table.add_column("Folder")
    table.add_column("First question", max_width=50)

    for summary in summaries:
        doc = summary.document
        table.add_row(
            doc.id[:8],
            doc.name,
            _format_date(doc.added_at),
            str(summary.exchange_count),
            doc.folder or "[dim]-[/dim]",
            summary.preview,
        )
    console.print(table)


@click.command("show")
@click.argument("document_id")
@click.option("--outline", "show_outline", is_flag=True, help="Only list the questions")
@click.pass_context
def show_document(ctx: click.Context, document_id: str, show_outline: bool):
    """Display a document as question/answer exchanges.

    DOCUMENT_ID may be a unique prefix of the id.
    """

    async def action(library: Library):
        return await library.open_document(resolve_document_id(library, document_id))

    opened = run_with_library(ctx, action)
    exchanges = opened.exchanges
    console.print(f"[bold]{opened.document.name}[/bold]")

    if not exchanges:
        console.print("[dim]No exchanges.[/dim]")
        return

    if show_outline:
        for i, label in enumerate(outline(exchanges, ctx.obj["settings"].outline_chars), 1):
            console.print(f"[dim]{i:>3}[/dim]  {label}")
        return

    total = len(exchanges)
    for i, exchange in enumerate(exchanges, 1):
        console.rule(f"[dim]{i} / {total}[/dim]")
        if exchange.question:
            console.print(Panel(Markdown(exchange.question), title="You", title_align="left", border_style="blue"))
        if exchange.answer:
            console.print(Panel(Markdown(exchange.answer), title="AI", title_align="left", border_style="green"))


@click.command("delete")
@click.argument("document_id")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_document(ctx: click.Context, document_id: str, yes: bool):
    """Delete a document.

    DOCUMENT_ID may be a unique prefix of the id.
    """
    if not yes and not click.confirm(f"Delete document {document_id}?"):
        console.print("[dim]Aborted.[/dim]")
        return

    async def action(library: Library):
        resolved = resolve_document_id(library, document_id)
        await library.delete_document(resolved)
        return resolved

    deleted = run_with_library(ctx, action)
    console.print(f"[green]Deleted:[/green] {deleted}")


@click.command("assign")
@click.argument("document_id")
@click.argument("folder", required=False)
@click.option("--clear", is_flag=True, help="Remove the document from its folder")
@click.pass_context
def assign(ctx: click.Context, document_id: str, folder: str | None, clear: bool):
    """Put a document in a folder, or take it out with --clear."""
    if clear == (folder is not None):
        raise click.UsageError("Give exactly one of FOLDER or --clear")

    async def action(library: Library):
        return await library.assign_folder(resolve_document_id(library, document_id), folder or "")

    doc = run_with_library(ctx, action)
    if doc.folder:
        console.print(f"[green]Moved[/green] {doc.name} [green]to[/green] {doc.folder}")
    else:
        console.print(f"[green]Uncategorized:[/green] {doc.name}")
