"""CLI for threads-mcp (browse threads, run the MCP server)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from threads_mcp.config import resolve_store_config
from threads_mcp.core.client import ThreadsClient
from threads_mcp.core.storage.json_store import JsonFileStorage, StorageError
from threads_mcp.core.tree.markdown import render_tree_as_markdown
from threads_mcp.logging_config import configure_logging
from threads_mcp.models.entity import Thread, is_container
from threads_mcp.models.query import ThreadFilter

app = typer.Typer(help="Threads: track ongoing work and serve it over MCP.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory holding threads.json"),
]
JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_client(data_dir: Path | None) -> ThreadsClient:
    config = resolve_store_config(data_dir)
    logger.debug("Using data file {}", config.data_file)
    return ThreadsClient(JsonFileStorage(config))


def _thread_line(thread: Thread) -> str:
    tags = f"  #{' #'.join(thread.tags)}" if thread.tags else ""
    return (
        f"  {thread.name} [{thread.status}, {thread.temperature}, "
        f"{thread.size}, i{thread.importance}]{tags}"
    )


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from threads_mcp.mcp.server import run_mcp_server

    run_mcp_server()


@app.command(name="list")
def list_cmd(
    status: Annotated[str | None, typer.Option("--status", "-s", help="Filter by status")] = None,
    temperature: Annotated[
        str | None, typer.Option("--temperature", "-t", help="Filter by temperature")
    ] = None,
    tag: Annotated[
        list[str] | None, typer.Option("--tag", help="Filter by tag (repeatable, any matches)")
    ] = None,
    data_dir: DataDirOption = None,
    output_json: JsonOption = False,
) -> None:
    """List threads."""
    client = _open_client(data_dir)
    try:
        threads = client.list_threads(
            ThreadFilter(status=status, temperature=temperature, tags=tuple(tag or ()))
        )
    except StorageError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps([t.to_dict() for t in threads], indent=2))
        return

    typer.echo(f"{len(threads)} threads:\n")
    for thread in threads:
        typer.echo(_thread_line(thread))
        typer.echo(f"    id={thread.id}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    data_dir: DataDirOption = None,
    output_json: JsonOption = False,
) -> None:
    """Search threads and containers by name, description or tag."""
    client = _open_client(data_dir)
    try:
        results = client.search(query)
    except StorageError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    typer.echo(f"Found {len(results)} results:\n")
    for entity in results:
        kind = "container" if is_container(entity) else "thread"
        typer.echo(f"  [{kind}] {entity.name}")
        if entity.description:
            typer.echo(f"    {entity.description[:80]}")
        typer.echo(f"    id={entity.id}")


@app.command()
def tree(
    entity: Annotated[
        str | None, typer.Argument(help="Root entity ID or name (default: everything)")
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
    data_dir: DataDirOption = None,
    output_json: JsonOption = False,
) -> None:
    """Show the hierarchy of containers and threads."""
    client = _open_client(data_dir)
    try:
        if entity is None:
            nodes = client.get_full_tree()
        else:
            found = client.get_entity(entity) or client.get_entity_by_name(entity)
            subtree = client.get_subtree(found.id) if found else None
            if subtree is None:
                typer.echo(f"Entity '{entity}' not found.")
                raise typer.Exit(1)
            nodes = [subtree]
    except StorageError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps([n.to_dict() for n in nodes], indent=2))
    elif nodes:
        typer.echo(render_tree_as_markdown(nodes, max_depth=max_depth), nl=False)
    else:
        typer.echo("No threads or containers yet.")


@app.command(name="next")
def next_cmd(data_dir: DataDirOption = None, output_json: JsonOption = False) -> None:
    """Suggest the next thread to work on."""
    client = _open_client(data_dir)
    try:
        thread = client.get_next_action()
    except StorageError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps(thread.to_dict() if thread else None, indent=2))
    elif thread is None:
        typer.echo("No active threads.")
    else:
        typer.echo(_thread_line(thread).strip())
        typer.echo(f"id={thread.id}")
