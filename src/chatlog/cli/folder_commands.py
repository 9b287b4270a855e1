"""Folder commands — chatlog folders list/add/remove."""

from __future__ import annotations

import click

from chatlog.cli.main import console, run_with_library
from chatlog.library import Library


@click.group()
def folders():
    """Manage folders."""
    pass


@folders.command("list")
@click.pass_context
def list_folders(ctx: click.Context):
    """List folders in the order they were added."""

    async def action(library: Library):
        counts = {name: 0 for name in library.folders}
        for doc in library.documents:
            if doc.folder in counts:
                counts[doc.folder] += 1
        return counts

    counts = run_with_library(ctx, action)
    if not counts:
        console.print("[dim]No folders.[/dim]")
        return
    for name, count in counts.items():
        console.print(f"{name} [dim]({count})[/dim]")


@folders.command("add")
@click.argument("name")
@click.pass_context
def add_folder(ctx: click.Context, name: str):
    """Create a folder."""

    async def action(library: Library):
        return await library.add_folder(name)

    if run_with_library(ctx, action):
        console.print(f"[green]Added folder:[/green] {name.strip()}")
    else:
        console.print(f"[yellow]Folder name is empty or already exists:[/yellow] {name!r}")
        raise SystemExit(1)


@folders.command("remove")
@click.argument("name")
@click.pass_context
def remove_folder(ctx: click.Context, name: str):
    """Delete a folder. Its documents become uncategorized."""

    async def action(library: Library):
        return await library.remove_folder(name)

    cleared = run_with_library(ctx, action)
    console.print(f"[green]Removed folder:[/green] {name} [dim]({cleared} document(s) unassigned)[/dim]")
