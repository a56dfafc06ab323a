"""Result writer for boolean operation output.

Results are written as indented JSON so they can be inspected by hand or
fed back into a host application.
"""

import json
from pathlib import Path
from typing import Any

from planform.exceptions import DocumentSaveError


class ResultWriter:
    """Writes boolean results to JSON documents."""

    @staticmethod
    def write(path: Path, payload: dict[str, Any]) -> None:
        """Write ``payload`` to ``path``.

        Args:
            path: Output file path; parent directories are created
            payload: JSON-serializable result dictionary

        Raises:
            DocumentSaveError: If the file cannot be written or the payload
                holds values strict JSON cannot represent (NaN, infinity)
        """
        try:
            text = json.dumps(payload, indent=2, allow_nan=False)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text + "\n", encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise DocumentSaveError(str(path), str(e)) from e

    @staticmethod
    def get_result_path(input_path: Path, operation: str) -> Path:
        """Get the default output path for an operation on ``input_path``.

        Example:
            scene.json -> scene-subtract.json
        """
        return input_path.with_name(f"{input_path.stem}-{operation}{input_path.suffix or '.json'}")
