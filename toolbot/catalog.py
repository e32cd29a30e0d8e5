"""Static tool catalog and command definitions."""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ToolEntry:
    name: str
    url: str
    blurb: str


CommandCatalog = Mapping[str, tuple[ToolEntry, ...]]


class CatalogError(ValueError):
    """Raised when a static data file is missing or malformed."""


def _read_json(path: str | Path):
    path = Path(path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(f"{path} not found")
    except json.JSONDecodeError as e:
        raise CatalogError(f"{path} is not valid JSON: {e}")


def _parse_entry(command: str, index: int, raw) -> ToolEntry:
    where = f"{command}[{index}]"
    if not isinstance(raw, dict):
        raise CatalogError(f"{where} must be an object")
    fields = {}
    for key in ("name", "url", "blurb"):
        value = raw.get(key)
        if not isinstance(value, str) or not value.strip():
            raise CatalogError(f"{where} is missing '{key}'")
        fields[key] = value.strip()
    if not fields["url"].startswith(("http://", "https://")):
        raise CatalogError(f"{where} url must be http(s): {fields['url']}")
    return ToolEntry(**fields)


def parse_catalog(data) -> CommandCatalog:
    """Turn decoded tools.json content into a read-only catalog.

    Keys are normalised to carry a leading slash; entry order is preserved.
    """
    if not isinstance(data, dict):
        raise CatalogError("tool catalog must be an object of command -> list")

    catalog: dict[str, tuple[ToolEntry, ...]] = {}
    for command, entries in data.items():
        key = command if command.startswith("/") else f"/{command}"
        if not isinstance(entries, list):
            raise CatalogError(f"{key} must map to a list of tools")
        catalog[key] = tuple(_parse_entry(key, i, raw) for i, raw in enumerate(entries))
    return MappingProxyType(catalog)


def load_catalog(path: str | Path) -> CommandCatalog:
    return parse_catalog(_read_json(path))


def load_command_definitions(path: str | Path) -> list[dict]:
    """Load commands.json. Definitions are passed to registration verbatim."""
    data = _read_json(path)
    if not isinstance(data, list):
        raise CatalogError("command definitions must be a list")
    for i, definition in enumerate(data):
        if not isinstance(definition, dict) or not definition.get("name"):
            raise CatalogError(f"command definition #{i} has no name")
    return data


def validate_catalog(catalog: CommandCatalog, definitions: list[dict]) -> list[str]:
    """List mismatches between the catalog and the registered definitions."""
    defined = {f"/{d['name']}" for d in definitions}
    problems = []
    for key in catalog:
        if key not in defined:
            problems.append(f"{key} has tools but no command definition")
    for key in sorted(defined):
        if key not in catalog:
            problems.append(f"{key} is registered but has no tools")
    return problems
