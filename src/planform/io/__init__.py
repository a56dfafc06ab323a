"""Document I/O layer for planform.

This module handles reading entity documents and writing boolean results
as JSON, for use by the command-line interface.

Key classes:
- SceneReader: Load entity documents
- ResultWriter: Save result documents
"""

from planform.io.reader import SceneReader
from planform.io.writer import ResultWriter

__all__ = [
    "ResultWriter",
    "SceneReader",
]
