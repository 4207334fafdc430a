"""Dataset catalog and record normalization.

Hymn datasets come in heterogeneous JSON shapes. A catalog file lists the
datasets and, for each one, how source fields map onto :class:`Document`
attributes. Mappings are either dotted paths into the record or a
``join_arrays`` spec that flattens verse/chorus blocks into one text.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any
import uuid

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hymnal_search.domain.model import Document


logger = logging.getLogger(__name__)

_ROW_CONTAINER_KEYS = ("hymns", "items", "rows")


class JoinArrays(BaseModel):
    """Flatten list-valued blocks of a record into a single text."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    join_arrays: list[str] = Field(default_factory=list, alias="joinArrays")
    labels: dict[str, str] = Field(default_factory=dict)


FieldSpec = str | JoinArrays | None


class FieldMapping(BaseModel):
    """Where each :class:`Document` attribute is found in a source record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: FieldSpec = None
    number: FieldSpec = None
    title: FieldSpec = None
    lyrics: FieldSpec = None
    author: FieldSpec = None
    tune: FieldSpec = None
    tune_name: FieldSpec = Field(default=None, alias="tuneName")
    meter: FieldSpec = None
    scripture: FieldSpec = None
    topics: FieldSpec = None


class DatasetConfig(BaseModel):
    """A single dataset entry in the catalog."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    mapping: FieldMapping = Field(default_factory=FieldMapping)


class Catalog(BaseModel):
    """The dataset catalog (``config.json``)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_url: str = Field(default="", alias="baseUrl")
    datasets: list[DatasetConfig] = Field(default_factory=list)

    @classmethod
    def from_json_file(cls, path: Path) -> Catalog:
        """Load the catalog from a JSON file.

        Raises:
            FileNotFoundError: If the catalog file doesn't exist
            ValueError: If the file is not valid JSON or fails validation
        """
        if not path.exists():
            raise FileNotFoundError(f"Catalog not found: {path}")

        try:
            data = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as exc:
            raise ValueError(f"Invalid catalog JSON in {path}: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid catalog {path}: {exc}") from exc

    def select(self, selector: str | int) -> DatasetConfig:
        """Return a dataset by index or by case-insensitive name."""

        if isinstance(selector, int) or str(selector).isdigit():
            idx = int(selector)
            if 0 <= idx < len(self.datasets):
                return self.datasets[idx]
            raise ValueError(f"Dataset index {idx} out of range (0-{len(self.datasets) - 1})")
        wanted = str(selector).strip().lower()
        for dataset in self.datasets:
            if dataset.name.lower() == wanted:
                return dataset
        available = [dataset.name for dataset in self.datasets]
        raise ValueError(f"Unknown dataset '{selector}'. Available: {available}")


def resolve_path(row: Any, path: str) -> Any:
    """Follow a dotted ``path`` through nested mappings; ``None`` when absent."""

    value = row
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
        if value is None:
            return None
    return value


def join_blocks(row: Any, spec: JoinArrays) -> str:
    """Flatten the list blocks named by ``spec`` into stanzas.

    A list of lists is a sequence of stanzas, each joined by newlines. A flat
    list is one block, preceded by its label when one is configured. Blocks
    are separated by a blank line.
    """

    if not isinstance(row, Mapping):
        return ""
    blocks: list[str] = []
    for key in spec.join_arrays:
        block = row.get(key)
        if not isinstance(block, list):
            continue
        if block and isinstance(block[0], list):
            blocks.extend("\n".join(str(line) for line in stanza) for stanza in block)
            continue
        label = spec.labels.get(key)
        if label:
            blocks.append(label)
        blocks.append("\n".join(str(line) for line in block))
    return "\n\n".join(blocks).strip()


def resolve_field(row: Any, spec: FieldSpec) -> Any:
    if spec is None:
        return None
    if isinstance(spec, JoinArrays):
        return join_blocks(row, spec)
    return resolve_path(row, spec)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_record(row: Any, mapping: FieldMapping) -> Document:
    """Map a raw source record onto a :class:`Document`.

    Missing fields become empty strings; the id falls back to the number,
    then the title, then a random UUID.
    """

    number = resolve_field(row, mapping.number)
    title = resolve_field(row, mapping.title)

    doc_id = next(
        (value for value in (resolve_field(row, mapping.id), number, title) if value is not None),
        None,
    )
    if doc_id is None:
        doc_id = uuid.uuid4()

    topics = resolve_field(row, mapping.topics)
    if topics is None:
        topics = []
    elif not isinstance(topics, list):
        topics = [topics] if topics else []

    return Document(
        id=str(doc_id),
        number=_as_text(number),
        title=_as_text(title),
        lyrics=_as_text(resolve_field(row, mapping.lyrics)),
        author=_as_text(resolve_field(row, mapping.author)),
        tune=_as_text(resolve_field(row, mapping.tune) or resolve_field(row, mapping.tune_name)),
        meter=_as_text(resolve_field(row, mapping.meter)),
        scripture=_as_text(resolve_field(row, mapping.scripture)),
        topics=[str(topic) for topic in topics],
    )


def extract_rows(data: Any) -> list[Any]:
    """Return the record list from a dataset payload."""

    if isinstance(data, list):
        return data
    if isinstance(data, Mapping):
        for key in _ROW_CONTAINER_KEYS:
            rows = data.get(key)
            if rows:
                return list(rows) if isinstance(rows, list) else []
    return []


def load_dataset(dataset: DatasetConfig, base_dir: Path | None = None) -> list[Document]:
    """Read and normalize every record of ``dataset``.

    Relative dataset paths resolve against ``base_dir`` (usually the
    directory holding the catalog).
    """

    path = Path(dataset.path)
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    try:
        data = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"Invalid dataset JSON in {path}: {exc}") from exc

    rows = extract_rows(data)
    documents = [normalize_record(row, dataset.mapping) for row in rows]
    logger.info("Loaded %d hymns from %s", len(documents), path)
    return documents
