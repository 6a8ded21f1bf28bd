"""Writers for partition output."""

from docsplit.storage.manifest_writer import generate_manifest_dict, save_manifest
from docsplit.storage.xml_writer import output_filename, save_documents

__all__ = [
    "generate_manifest_dict",
    "output_filename",
    "save_documents",
    "save_manifest",
]
