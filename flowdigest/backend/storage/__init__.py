"""storage/__init__.py"""
from .serializers import FlowRecordDocument, MetadataDocument, RunDocument
from .writer import OutputWriteError, output_path, write_document

__all__ = [
    "RunDocument",
    "MetadataDocument",
    "FlowRecordDocument",
    "OutputWriteError",
    "output_path",
    "write_document",
]
