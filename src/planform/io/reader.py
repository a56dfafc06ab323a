"""Scene reader for loading entity documents.

A scene document is a JSON object with an "entities" list, each entry a
tagged entity dictionary:

    {"entities": [
        {"type": "rectangle", "start": {"x": 0, "y": 0}, "width": 100, "height": 100},
        {"type": "circle", "center": {"x": 50, "y": 50}, "radius": 10}
    ]}
"""

import json
from collections.abc import Iterator
from pathlib import Path

from planform.domain import Entity, entity_from_dict
from planform.exceptions import DocumentLoadError, EntityFormatError


class SceneReader:
    """Loads entity documents for the boolean engine.

    Example:
        reader = SceneReader(Path("scene.json"))
        reader.load()
        for entity in reader.iter_entities():
            print(entity.kind)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the scene reader.

        Args:
            path: Path to the JSON scene document
        """
        self._path = path
        self._entities: list[Entity] | None = None

    def load(self) -> list[Entity]:
        """Load and parse the document.

        Returns:
            Entities in document order

        Raises:
            DocumentLoadError: If the file is missing, not JSON, or holds an
                invalid entity
        """
        if not self._path.exists():
            raise DocumentLoadError(str(self._path), "file not found")

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(str(self._path), str(e)) from e
        except json.JSONDecodeError as e:
            raise DocumentLoadError(str(self._path), f"invalid JSON: {e.msg}") from e

        if not isinstance(data, dict) or not isinstance(data.get("entities"), list):
            raise DocumentLoadError(str(self._path), "expected an object with an 'entities' list")

        entities = []
        for index, item in enumerate(data["entities"]):
            try:
                entities.append(entity_from_dict(item))
            except EntityFormatError as e:
                raise DocumentLoadError(str(self._path), f"entity {index}: {e.details}") from e

        self._entities = entities
        return entities

    @property
    def entity_count(self) -> int:
        """Return the number of entities in the document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._entities is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        return len(self._entities)

    def iter_entities(self) -> Iterator[Entity]:
        """Iterate over loaded entities.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._entities is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        yield from self._entities

    def get_entity(self, index: int) -> Entity:
        """Get an entity by its position in the document.

        Raises:
            RuntimeError: If the document has not been loaded yet
            IndexError: If there is no entity at ``index``
        """
        if self._entities is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        if not 0 <= index < len(self._entities):
            raise IndexError(f"No entity at index {index} ({len(self._entities)} entities)")
        return self._entities[index]
