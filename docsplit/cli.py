"""Command-line interface for docsplit."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docsplit import __version__
from docsplit.config import validate_partition_count
from docsplit.loader import is_url, load_document
from docsplit.logging_config import setup_logging
from docsplit.partitioning import Partitioner
from docsplit.rules import RoutingRules
from docsplit.storage import save_documents, save_manifest

app = typer.Typer(
    name="docsplit",
    help="Split an XML document into several documents using routing rules.",
)
console = Console()


def _stem_for(source: str) -> str:
    """Derive the output file stem from a path or URL."""
    name = source.rstrip("/").rsplit("/", 1)[-1] if is_url(source) else Path(source).name
    stem = name.rsplit(".", 1)[0] if "." in name else name
    return stem or "document"


@app.command()
def partition(
    source: str = typer.Argument(
        ...,
        help="Path or http(s) URL of the XML document to split",
    ),
    partitions: int | None = typer.Option(
        None,
        "--partitions",
        "-n",
        help="Number of output documents",
    ),
    match: list[str] | None = typer.Option(
        None,
        "--match",
        "-m",
        help="Route by attribute value, e.g. catalog,book,id (repeatable)",
    ),
    include_value: list[str] | None = typer.Option(
        None,
        "--include-value",
        help="Only route these attribute values (repeatable)",
    ),
    exclude_value: list[str] | None = typer.Option(
        None,
        "--exclude-value",
        help="Never route these attribute values (repeatable)",
    ),
    once: list[str] | None = typer.Option(
        None,
        "--once",
        help="Tag path to put in exactly one output, e.g. catalog,notice (repeatable)",
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        help="Tag path to drop from all outputs (repeatable)",
    ),
    empty_tag: str | None = typer.Option(
        None,
        "--empty-tag",
        help="Placeholder tag for outputs without content (default: empty)",
    ),
    rules_file: Path | None = typer.Option(
        None,
        "--rules",
        "-r",
        help="YAML file with routing rules; options above are added to it",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        help="Directory for the output documents",
    ),
    manifest: bool = typer.Option(
        True,
        "--manifest/--no-manifest",
        help="Write a YAML manifest next to the outputs",
    ),
    pretty: bool = typer.Option(
        True,
        "--pretty/--no-pretty",
        help="Indent the XML output",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every routing decision",
    ),
) -> None:
    """Partition a document into N documents."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        base = RoutingRules.from_yaml_file(rules_file) if rules_file else RoutingRules()
        rules = base.merged(
            partitions=partitions,
            match=match,
            include_values=include_value,
            exclude_values=exclude_value,
            once=once,
            exclude=exclude,
            empty_tag=empty_tag,
        )
        if rules.partitions is None:
            raise ValueError("Number of partitions missing: use --partitions or a rules file")
        validate_partition_count(rules.partitions)

        partitioner = Partitioner(rules.partitions, rules.to_ruleset(), rules.empty_tag)

        console.print(f"[dim]Loading {escape(source)}...[/dim]")
        document = load_document(source)

        run = partitioner.run(document)

        stem = _stem_for(source)
        files = save_documents(run.documents, output_dir, stem, pretty_print=pretty)
        if manifest:
            save_manifest(run, files, output_dir / f"{stem}.manifest.yaml")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e

    table = Table(title=f"{len(files)} documents")
    table.add_column("Partition", justify="right")
    table.add_column("File")
    table.add_column("Keys")
    for document, path in zip(run.documents, files, strict=True):
        keys = [k for k, i in run.key_index.items() if i == document.index]
        label = "[dim](empty)[/dim]" if document.placeholder else escape(", ".join(keys))
        table.add_row(str(document.index), str(path), label)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"docsplit {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
