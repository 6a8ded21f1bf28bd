"""YAML manifest writer for partition runs."""

import io
from pathlib import Path

import ruamel.yaml

from docsplit.partitioning.partitioner import PartitionRun


def generate_manifest_dict(run: PartitionRun, files: list[Path]) -> dict:
    """Describe a partition run as a dictionary.

    Args:
        run: The finished partition run
        files: Output files in partition order

    Returns:
        Dictionary ready for YAML serialization
    """
    partitions = []
    for document, path in zip(run.documents, files, strict=True):
        keys = [key for key, index in run.key_index.items() if index == document.index]
        partitions.append(
            {
                "index": document.index,
                "file": path.name,
                "empty": document.placeholder,
                "keys": keys,
            }
        )

    return {
        "partitions": len(run.documents),
        "once_routed": run.once_count,
        "key_index": dict(run.key_index),
        "outputs": partitions,
    }


def save_manifest(run: PartitionRun, files: list[Path], output_file: Path) -> Path:
    """Save the manifest of a partition run as YAML.

    Args:
        run: The finished partition run
        files: Output files in partition order
        output_file: Where to write the manifest

    Returns:
        Path to the saved file
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)

    yaml = ruamel.yaml.YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.explicit_start = True

    buffer = io.StringIO()
    yaml.dump(generate_manifest_dict(run, files), buffer)

    with open(output_file, "w", encoding="utf-8", newline="\n") as f:
        f.write(buffer.getvalue())

    return output_file
