"""
Generator plugin system for ldmap.

Generators turn a resolved metadata tree into whatever the host needs
(serialization code, documentation, shapes). The builder never looks at
what a generator produces.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..core.errors import GeneratorError
from ..core.ir.metadata import CaseNode, FieldNode, RecordNode, TaggedUnionNode, TypeNode
from ..core.manifest import BuildConfig

logger = logging.getLogger(__name__)


class Generator(ABC):
    """
    Abstract base class for all generators.

    `generate()` calls `emit_type` once for the root node, then
    `emit_record` and `emit_field` for records, or `emit_enum_case` for
    each case of a tagged union. `finish()` returns the output.
    """

    @abstractmethod
    def emit_type(self, node: TypeNode) -> None:
        """Called once with the root node of the tree."""

    @abstractmethod
    def emit_record(self, record: RecordNode) -> None:
        """Called once for a record, before its fields."""

    @abstractmethod
    def emit_enum_case(self, union: TaggedUnionNode, case: CaseNode) -> None:
        """Called for every case of a tagged union, in declaration order."""

    @abstractmethod
    def emit_field(self, record: RecordNode, field: FieldNode) -> None:
        """Called for every field of a record, in declaration order."""

    def finish(self) -> Any:
        """Return the generated output. Default: None."""
        return None


def generate(node: TypeNode, generator: Generator) -> Any:
    """
    Walk a metadata tree, dispatching each node to `generator`.

    Returns:
        Whatever `generator.finish()` returns
    """
    logger.debug("Generating %s for '%s'", type(generator).__name__, node.name)
    generator.emit_type(node)
    match node:
        case RecordNode():
            generator.emit_record(node)
            for field in node.fields:
                generator.emit_field(node, field)
        case TaggedUnionNode():
            for case in node.cases:
                generator.emit_enum_case(node, case)
    return generator.finish()


class GeneratorRegistry:
    """
    Registry for generator plugins.

    Supports:
    - Manual registration via register()
    - Built-in generators via register_builtins()
    - Lookup by name
    """

    def __init__(self) -> None:
        self._generators: dict[str, type[Generator]] = {}

    def register(self, name: str, generator_class: type[Generator]) -> None:
        """
        Register a generator class.

        Raises:
            GeneratorError: If name already registered or class invalid
        """
        if name in self._generators:
            raise GeneratorError(
                f"Generator '{name}' is already registered. Cannot register {generator_class.__name__}."
            )

        if not issubclass(generator_class, Generator):
            raise GeneratorError(f"Generator class {generator_class.__name__} must extend Generator")

        self._generators[name] = generator_class

    def get(self, name: str) -> Generator:
        """
        Get a fresh generator instance by name.

        Raises:
            GeneratorError: If generator not found
        """
        if name not in self._generators:
            available = list(self._generators.keys())
            raise GeneratorError(f"Generator '{name}' not found. Available generators: {available}")

        return self._generators[name]()

    def list_generators(self) -> list[str]:
        return list(self._generators.keys())

    def register_builtins(self) -> None:
        from .summary import SummaryGenerator

        if "summary" not in self._generators:
            self.register("summary", SummaryGenerator)


# Global registry instance
_registry: GeneratorRegistry | None = None


def get_registry() -> GeneratorRegistry:
    """
    Get the global generator registry.

    Registers the built-in generators on first call.
    """
    global _registry
    if _registry is None:
        _registry = GeneratorRegistry()
        _registry.register_builtins()
    return _registry


def register_generator(name: str, generator_class: type[Generator]) -> None:
    get_registry().register(name, generator_class)


def get_generator(name: str | None = None, config: BuildConfig | None = None) -> Generator:
    """
    Get a generator by name, falling back to the configured default.

    Raises:
        GeneratorError: If no name is given and none is configured
    """
    if name is None:
        name = (config or BuildConfig()).default_generator
    if name is None:
        raise GeneratorError("No generator named and no default_generator configured")
    return get_registry().get(name)


def list_generators() -> list[str]:
    return get_registry().list_generators()


__all__ = [
    "Generator",
    "GeneratorRegistry",
    "GeneratorError",
    "generate",
    "get_registry",
    "register_generator",
    "get_generator",
    "list_generators",
]
