"""Persistence codec - snapshot dicts, JSON and XML save files.

A snapshot is a JSON-compatible dict holding the scalar fields and one
record per grid cell (row-major, Empty cells included)::

    {"version": 1, "width": 12, "height": 12, "money": 8000, ...,
     "tick_count": 0, "tiles": [{"x": 0, "y": 0, "type": "Empty", "level": 1}, ...]}

The XML form carries the same fields as PascalCase tags
(``Width``, ``TickCount``, ``<Tiles><Tile><X/>...``). Saves with a
``<SerializableCityState>`` root and ``<SerializableTile>`` records load too.
"""
from __future__ import annotations

import json
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import IO, Any, Union

from tick_city.state import RESOURCE_FIELDS, CityState
from tick_city.types import (
    CorruptSnapshotError,
    IoFailureError,
    TileType,
)

SNAPSHOT_VERSION = 1
FORMATS = ("json", "xml")

SCALAR_FIELDS = ("width", "height", *RESOURCE_FIELDS, "tick_count")

# snapshot key -> XML tag
_XML_TAGS = {
    "width": "Width",
    "height": "Height",
    "money": "Money",
    "power": "Power",
    "water": "Water",
    "materials": "Materials",
    "population": "Population",
    "jobs": "Jobs",
    "pollution": "Pollution",
    "tick_count": "TickCount",
}
_XML_TILE_TAGS = {"x": "X", "y": "Y", "type": "Type", "level": "Level"}
# older saves use the Serializable* names
_XML_ROOTS = ("CityState", "SerializableCityState")
_XML_TILE_RECORDS = ("Tile", "SerializableTile")

Target = Union[str, "os.PathLike[str]", IO[str]]


# -- Snapshot dicts --


def serialize(state: CityState) -> dict[str, Any]:
    data: dict[str, Any] = {"version": SNAPSHOT_VERSION}
    for name in SCALAR_FIELDS:
        data[name] = getattr(state, name)
    data["tiles"] = [
        {"x": x, "y": y, "type": tile.category.value, "level": tile.level}
        for x, y, tile in state.grid.cells()
    ]
    return data


def _require_int(data: dict[str, Any], key: str, where: str = "snapshot") -> int:
    if key not in data:
        raise CorruptSnapshotError(f"Missing field {key!r} in {where}")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptSnapshotError(
            f"Field {key!r} in {where} must be an integer, got {value!r}"
        )
    return value


def deserialize(data: dict[str, Any]) -> CityState:
    if not isinstance(data, dict):
        raise CorruptSnapshotError(f"Snapshot must be a mapping, got {type(data).__name__}")
    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise CorruptSnapshotError(
            f"Unsupported snapshot version {version!r}, expected {SNAPSHOT_VERSION}"
        )

    scalars = {name: _require_int(data, name) for name in SCALAR_FIELDS}
    width, height = scalars.pop("width"), scalars.pop("height")
    if width <= 0 or height <= 0:
        raise CorruptSnapshotError(
            f"Grid dimensions must be positive, got {width}x{height}"
        )
    state = CityState(width, height, **scalars)

    tiles = data.get("tiles", [])
    if not isinstance(tiles, list):
        raise CorruptSnapshotError("Field 'tiles' must be a list")
    seen: set[tuple[int, int]] = set()
    for i, record in enumerate(tiles):
        where = f"tile record {i}"
        if not isinstance(record, dict):
            raise CorruptSnapshotError(f"{where} must be a mapping")
        x = _require_int(record, "x", where)
        y = _require_int(record, "y", where)
        level = _require_int(record, "level", where)
        if not state.grid.in_bounds(x, y):
            raise CorruptSnapshotError(
                f"{where}: ({x}, {y}) out of bounds for {width}x{height} grid"
            )
        if (x, y) in seen:
            raise CorruptSnapshotError(f"{where}: duplicate cell ({x}, {y})")
        seen.add((x, y))
        try:
            category = TileType.parse(str(record.get("type", "")))
        except ValueError as exc:
            raise CorruptSnapshotError(f"{where}: {exc}") from None
        if level < 1 or (category is TileType.EMPTY and level != 1):
            raise CorruptSnapshotError(
                f"{where}: invalid level {level} for {category.value}"
            )
        state.grid.set(x, y, category, level)
    return state


# -- JSON --


def to_json(state: CityState, indent: int | None = 2) -> str:
    return json.dumps(serialize(state), indent=indent)


def from_json(text: str) -> CityState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CorruptSnapshotError(f"Malformed JSON save: {exc}") from exc
    return deserialize(data)


# -- XML --


def to_xml(state: CityState) -> str:
    data = serialize(state)
    root = ET.Element("CityState", version=str(SNAPSHOT_VERSION))
    for key, tag in _XML_TAGS.items():
        ET.SubElement(root, tag).text = str(data[key])
    tiles_el = ET.SubElement(root, "Tiles")
    for record in data["tiles"]:
        tile_el = ET.SubElement(tiles_el, "Tile")
        for key, tag in _XML_TILE_TAGS.items():
            ET.SubElement(tile_el, tag).text = str(record[key])
    ET.indent(root)
    return ET.tostring(root, encoding="unicode")


def _xml_value(parent: ET.Element, key: str, tag: str) -> int | str | None:
    el = parent.find(tag)
    if el is None or el.text is None:
        return None
    text = el.text.strip()
    if key == "type":
        return text
    try:
        return int(text)
    except ValueError:
        raise CorruptSnapshotError(
            f"<{tag}> must be an integer, got {text!r}"
        ) from None


def from_xml(text: str) -> CityState:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise CorruptSnapshotError(f"Malformed XML save: {exc}") from exc
    if root.tag not in _XML_ROOTS:
        raise CorruptSnapshotError(f"Unexpected root element <{root.tag}>")

    data: dict[str, Any] = {}
    version = root.get("version")
    if version is not None:
        try:
            data["version"] = int(version)
        except ValueError:
            raise CorruptSnapshotError(f"Bad version attribute {version!r}") from None
    for key, tag in _XML_TAGS.items():
        value = _xml_value(root, key, tag)
        if value is not None:
            data[key] = value

    tiles: list[dict[str, Any]] = []
    tiles_el = root.find("Tiles")
    if tiles_el is not None:
        for i, tile_el in enumerate(tiles_el):
            if tile_el.tag not in _XML_TILE_RECORDS:
                raise CorruptSnapshotError(
                    f"Unexpected <{tile_el.tag}> at position {i} in <Tiles>"
                )
            record: dict[str, Any] = {}
            for key, tag in _XML_TILE_TAGS.items():
                value = _xml_value(tile_el, key, tag)
                if value is not None:
                    record[key] = value
            tiles.append(record)
    data["tiles"] = tiles
    return deserialize(data)


# -- Streams and files --


def _infer_format(target: Target, fmt: str | None) -> str:
    if fmt is None:
        if isinstance(target, (str, os.PathLike)):
            fmt = "xml" if Path(target).suffix.lower() == ".xml" else "json"
        else:
            fmt = "json"
    if fmt not in FORMATS:
        raise ValueError(f"Unknown save format {fmt!r}, expected one of {FORMATS}")
    return fmt


def dumps(state: CityState, fmt: str = "json") -> str:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown save format {fmt!r}, expected one of {FORMATS}")
    return to_xml(state) if fmt == "xml" else to_json(state)


def loads(text: str, fmt: str = "json") -> CityState:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown save format {fmt!r}, expected one of {FORMATS}")
    return from_xml(text) if fmt == "xml" else from_json(text)


def save(state: CityState, target: Target, fmt: str | None = None) -> None:
    """Write *state* to a path or writable text stream.

    Raises IoFailureError if the underlying storage fails.
    """
    fmt = _infer_format(target, fmt)
    text = dumps(state, fmt)
    try:
        if isinstance(target, (str, os.PathLike)):
            Path(target).write_text(text, encoding="utf-8")
        else:
            target.write(text)
    except OSError as exc:
        raise IoFailureError(f"Failed to write save: {exc}") from exc


def load(source: Target, fmt: str | None = None) -> CityState:
    """Read a CityState from a path or readable text stream.

    Raises IoFailureError if the storage fails and CorruptSnapshotError if
    the contents are not a valid save.
    """
    fmt = _infer_format(source, fmt)
    try:
        if isinstance(source, (str, os.PathLike)):
            text = Path(source).read_text(encoding="utf-8")
        else:
            text = source.read()
    except UnicodeDecodeError as exc:
        raise CorruptSnapshotError(f"Save is not valid UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise IoFailureError(f"Failed to read save: {exc}") from exc
    return loads(text, fmt)
