"""Remote parameter schema: parsing the generator metadata and caching it per process."""
from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

import httpx

from javascaffold.errors import NetworkError, ParseError


class ParameterKind(Enum):
    SINGLE_SELECT = "single-select"
    ACTION = "action"
    TEXT = "text"
    HIERARCHICAL_MULTI_SELECT = "hierarchical-multi-select"


@dataclass(frozen=True)
class ParameterOption:
    id: str
    label: str


@dataclass(frozen=True)
class DependencyGroup:
    label: str
    options: tuple[ParameterOption, ...] = ()


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    kind: ParameterKind
    default: str = ""
    options: tuple[ParameterOption, ...] = ()
    groups: tuple[DependencyGroup, ...] = ()

    @property
    def option_ids(self) -> tuple[str, ...]:
        return tuple(o.id for o in self.options)


@dataclass(frozen=True)
class RemoteSchema:
    """Read-only mapping of parameter name to spec, in document order."""

    parameters: Mapping[str, ParameterSpec] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def __getitem__(self, name: str) -> ParameterSpec:
        return self.parameters[name]

    def __contains__(self, name: object) -> bool:
        return name in self.parameters

    def __iter__(self):
        return iter(self.parameters)

    def __len__(self) -> int:
        return len(self.parameters)


def _parse_options(values: object) -> tuple[ParameterOption, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(
        ParameterOption(id=str(v["id"]), label=str(v.get("name", v["id"])))
        for v in values
        if isinstance(v, dict) and "id" in v
    )


def _parse_groups(values: object) -> tuple[DependencyGroup, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(
        DependencyGroup(label=str(g.get("name", "")), options=_parse_options(g.get("values")))
        for g in values
        if isinstance(g, dict)
    )


def parse_schema(document: object) -> RemoteSchema:
    """Build a RemoteSchema from a decoded metadata document.

    Top-level entries that are not objects with a ``type`` (``_links`` and
    friends) are not parameters and are skipped. Unknown types are skipped
    with a log line so a newer server does not break the form.
    """
    if not isinstance(document, dict):
        raise ParseError(f"Expected a JSON object, got {type(document).__name__}")

    parameters: dict[str, ParameterSpec] = {}
    for name, entry in document.items():
        if not isinstance(entry, dict) or "type" not in entry:
            continue
        try:
            kind = ParameterKind(entry["type"])
        except ValueError:
            print(f"[schema] Skipping '{name}': unsupported type '{entry['type']}'")
            continue

        default = entry.get("default")
        parameters[name] = ParameterSpec(
            name=name,
            kind=kind,
            default="" if default is None else str(default),
            options=_parse_options(entry.get("values"))
            if kind is not ParameterKind.HIERARCHICAL_MULTI_SELECT
            else (),
            groups=_parse_groups(entry.get("values"))
            if kind is ParameterKind.HIERARCHICAL_MULTI_SELECT
            else (),
        )

    return RemoteSchema(parameters)


class SchemaCache:
    """Fetches the generator metadata once and keeps it until refresh() is called."""

    def __init__(self, url: str, accept: str, timeout: float | None = None):
        self.url = url
        self.headers = {"Accept": accept}
        self.timeout = timeout
        self._schema: RemoteSchema | None = None
        self._lock = asyncio.Lock()

    @property
    def cached(self) -> RemoteSchema | None:
        return self._schema

    async def fetch(self) -> RemoteSchema:
        """Return the schema, issuing the GET only on first use."""
        if self._schema is not None:
            return self._schema

        async with self._lock:
            # Another flow may have populated it while we waited
            if self._schema is not None:
                return self._schema

            print(f"[schema] Fetching metadata from {self.url}")
            try:
                async with httpx.AsyncClient() as client:
                    resp = await client.get(self.url, headers=self.headers, timeout=self.timeout)
                    resp.raise_for_status()
            except httpx.HTTPError as e:
                raise NetworkError(f"Failed to fetch metadata from {self.url}: {e}") from e

            try:
                document = resp.json()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ParseError(f"Metadata from {self.url} is not valid JSON: {e}") from e

            self._schema = parse_schema(document)
            print(f"[schema] Cached {len(self._schema)} parameters")
            return self._schema

    def refresh(self) -> None:
        """Drop the cached schema so the next fetch() goes to the server again."""
        self._schema = None
