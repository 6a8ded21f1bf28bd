"""XML writer for partitioned documents."""

from pathlib import Path

from docsplit.partitioning.protocols import OutputDocument


def output_filename(stem: str, index: int) -> str:
    """Name of the file holding output document `index`.

    Args:
        stem: Base name shared by all outputs of one run
        index: Partition index

    Returns:
        File name like "catalog.0.xml"
    """
    return f"{stem}.{index}.xml"


def save_documents(
    documents: list[OutputDocument],
    output_dir: Path,
    stem: str,
    pretty_print: bool = True,
) -> list[Path]:
    """Write each output document to its own XML file.

    Args:
        documents: Output documents of a partition run
        output_dir: Directory to write to (created if missing)
        stem: Base name for the files
        pretty_print: Indent the XML output

    Returns:
        Paths of the written files, in partition order

    Raises:
        DocumentShapeError: If a document has more than one top-level element
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    paths: list[Path] = []
    for document in documents:
        path = output_dir / output_filename(stem, document.index)
        path.write_bytes(document.to_bytes(pretty_print=pretty_print))
        paths.append(path)

    return paths
