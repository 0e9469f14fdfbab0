"""Command line interface for docnav."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from docnav.config import AppConfig
from docnav.index.catalog import DocumentCatalog


console = Console()
app = typer.Typer(help="docnav - in-memory search over a markdown documentation tree")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _open_catalog(docs: Optional[Path]) -> DocumentCatalog:
    config = AppConfig(docs_path=docs if docs is not None else AppConfig().docs_path)
    resolved = config.resolve_docs_path(Path.cwd())
    if not resolved.is_dir():
        raise typer.BadParameter(f"Documentation folder not found: {resolved}")
    return DocumentCatalog.open(resolved, fallback_module=config.fallback_module)


@app.command()
def index(
    docs: Path = typer.Argument(None, help="Documentation root folder."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Index a documentation tree and report statistics."""
    _setup_logging(verbose)
    catalog = _open_catalog(docs)
    stats = catalog.stats

    console.print(
        f"Indexed: {stats.indexed_files}, failed: {stats.failed_files}, "
        f"total: {stats.total_files} in {stats.duration_ms:.1f} ms"
    )
    for path in stats.failed_paths:
        console.print(f"[red]Failed:[/red] {path}")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Group")
    table.add_column("Name")
    table.add_column("Documents", justify="right")
    for module, count in sorted(stats.by_module.items()):
        table.add_row("module", module, str(count))
    for category, count in sorted(stats.by_category.items()):
        table.add_row("category", category, str(count))
    console.print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    docs: Path = typer.Option(None, "--docs", help="Documentation root folder"),
    limit: int = typer.Option(AppConfig().search_limit, help="Number of results to display"),
    module: Optional[str] = typer.Option(None, help="Restrict results to one module"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Execute a ranked full-text search."""
    _setup_logging(verbose)
    if not query.strip():
        raise typer.BadParameter("Query must not be empty")

    catalog = _open_catalog(docs)
    results = catalog.search(query, limit=limit, module=module)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Relevance", justify="right")
    table.add_column("Document")
    table.add_column("Title")
    table.add_column("Excerpt")

    for result in results:
        table.add_row(
            str(result.relevance), result.document.id, result.document.title, result.excerpt
        )

    console.print(table)


@app.command()
def show(
    name: str = typer.Argument(..., help="Document id or name (fuzzy)"),
    docs: Path = typer.Option(None, "--docs", help="Documentation root folder"),
    examples: bool = typer.Option(False, "--examples", help="Only print code examples"),
    props: bool = typer.Option(False, "--props", help="Only print the props reference"),
) -> None:
    """Show one document resolved by id or fuzzy name."""
    catalog = _open_catalog(docs)
    entry = catalog.resolve(name)
    if entry is None:
        console.print(f"[yellow]No document matches '{name}'.[/yellow]")
        raise typer.Exit(code=1)

    if examples:
        blocks = catalog.code_examples(entry.id) or []
        if not blocks:
            console.print(f"[yellow]No code examples in {entry.id}.[/yellow]")
        for block in blocks:
            console.print(block, markup=False, highlight=False)
            console.print()
        return

    if props:
        section = catalog.props_reference(entry.id)
        if section is None:
            console.print(f"[yellow]No props reference in {entry.id}.[/yellow]")
            return
        console.print(Markdown(section))
        return

    metadata = entry.metadata
    console.print(f"[bold]{entry.title}[/bold] ({entry.id})")
    console.print(f"Module: {entry.module}  Category: {entry.category or '-'}")
    if metadata.package_name:
        console.print(f"Package: {metadata.package_name}", markup=False)
    if metadata.import_statement:
        console.print(f"Import: {metadata.import_statement}", markup=False)
    if metadata.see_also:
        console.print(f"See also: {', '.join(metadata.see_also)}", markup=False)
    console.print(Markdown(entry.content))


@app.command("list")
def list_documents(
    docs: Path = typer.Option(None, "--docs", help="Documentation root folder"),
    category: Optional[str] = typer.Option(None, help="List documents in a category"),
    module: Optional[str] = typer.Option(None, help="List documents in a module"),
) -> None:
    """List documents by category or module, or the taxonomy itself."""
    catalog = _open_catalog(docs)

    if category is None and module is None:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Group")
        table.add_column("Name")
        table.add_column("Documents", justify="right")
        for name, count in catalog.modules():
            table.add_row("module", name, str(count))
        for name, count in catalog.categories():
            table.add_row("category", name, str(count))
        console.print(table)
        return

    entries = catalog.by_category(category) if category is not None else catalog.by_module(module)
    if not entries:
        console.print("[yellow]No documents found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Document")
    table.add_column("Title")
    table.add_column("Description")
    for entry in entries:
        table.add_row(entry.id, entry.title, entry.metadata.description or "")
    console.print(table)
