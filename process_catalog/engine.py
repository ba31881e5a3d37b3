"""
Process Engine — The collaborator the catalog reads from.

`ProcessEngine` / `ProcessHandle` describe the narrow surface the catalog
needs from a host engine. `InMemoryProcessEngine` is a concrete engine that
keeps definitions in memory and can be seeded from a directory of YAML files:

  processes/
    orders.yaml       # id, name, optional metadata mapping
    shipping.yaml
    _draft.yaml       # skipped (leading underscore)

Definitions can be (re)deployed and removed at runtime; listing returns a
snapshot taken under a lock, so concurrent redeployments never break
iteration.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

import structlog
import yaml

logger = structlog.get_logger(__name__)


# ── Collaborator interface ───────────────────────────────────────────


@runtime_checkable
class ProcessHandle(Protocol):
    """A single registered process as the engine exposes it."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def meta_data(self) -> Mapping[str, Any]: ...


@runtime_checkable
class ProcessEngine(Protocol):
    """Registry of process definitions owned by the host engine."""

    def process_ids(self) -> Iterable[str]: ...

    def process_by_id(self, process_id: str) -> ProcessHandle:
        """Return the handle for `process_id` or raise KeyError."""
        ...


# ── In-memory engine ─────────────────────────────────────────────────


@dataclass(frozen=True)
class ProcessDefinition:
    """A process definition held by the in-memory engine."""

    id: str
    name: str
    meta_data: dict[str, Any] = field(default_factory=dict)


class InMemoryProcessEngine:
    """
    Holds process definitions keyed by id, in registration order.

    Usage:
        engine = InMemoryProcessEngine.from_directory("processes")
        engine.register(ProcessDefinition(id="orders", name="Order Process"))

        for process_id in engine.process_ids():
            handle = engine.process_by_id(process_id)
    """

    def __init__(self, definitions: Iterable[ProcessDefinition] = ()):
        self._definitions: dict[str, ProcessDefinition] = {}
        self._lock = threading.Lock()
        for definition in definitions:
            self.register(definition)

    # ── Registration ─────────────────────────────────────────────────

    def register(self, definition: ProcessDefinition) -> None:
        """Deploy a definition. Redeploying an id replaces it in place."""
        with self._lock:
            self._definitions[definition.id] = definition
        logger.info("process_registered", process_id=definition.id, name=definition.name)

    def unregister(self, process_id: str) -> None:
        """Remove a definition. Unknown ids are ignored."""
        with self._lock:
            removed = self._definitions.pop(process_id, None)
        if removed is not None:
            logger.info("process_unregistered", process_id=process_id)

    # ── Lookup ───────────────────────────────────────────────────────

    def process_ids(self) -> list[str]:
        with self._lock:
            return list(self._definitions)

    def process_by_id(self, process_id: str) -> ProcessDefinition:
        with self._lock:
            definition = self._definitions.get(process_id)
        if definition is None:
            raise KeyError(f"Process '{process_id}' not found in engine.")
        return definition

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._definitions)

    # ── Discovery ────────────────────────────────────────────────────

    @classmethod
    def from_directory(cls, processes_dir: str | Path) -> InMemoryProcessEngine:
        """Build an engine seeded with every definition found in `processes_dir`."""
        engine = cls()
        engine.discover(processes_dir)
        return engine

    def discover(self, processes_dir: str | Path) -> list[str]:
        """
        Scan a directory for *.yaml / *.yml definitions and register them.

        Returns the list of registered process ids. Files starting with _ or .
        are skipped. A file that fails to load is logged and skipped. When two
        files declare the same id the later one (by file name) wins.
        """
        discovered: list[str] = []
        directory = Path(processes_dir)

        if not directory.is_dir():
            logger.warning("processes_dir_not_found", path=str(directory))
            return discovered

        for item in sorted(directory.iterdir()):
            if not item.is_file() or item.suffix not in (".yaml", ".yml"):
                continue
            if item.name.startswith("_") or item.name.startswith("."):
                continue

            try:
                definition = load_definition(item)
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error("process_definition_load_failed", file=item.name, error=str(e))
                continue

            if definition.id in discovered:
                logger.warning(
                    "process_definition_duplicate_id",
                    process_id=definition.id,
                    file=item.name,
                )
            else:
                discovered.append(definition.id)
            self.register(definition)

        logger.info("processes_discovered", count=len(discovered), processes=discovered)
        return discovered


def load_definition(path: Path) -> ProcessDefinition:
    """Parse one YAML process definition file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a mapping at the top level")

    process_id = data.get("id")
    name = data.get("name")
    if not isinstance(process_id, str) or not process_id:
        raise ValueError(f"{path.name}: 'id' must be a non-empty string")
    if not isinstance(name, str) or not name:
        raise ValueError(f"{path.name}: 'name' must be a non-empty string")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError(f"{path.name}: 'metadata' must be a mapping")

    return ProcessDefinition(id=process_id, name=name, meta_data={str(k): v for k, v in metadata.items()})
