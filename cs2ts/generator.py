# File: cs2ts/generator.py
"""
cs2ts - Generation orchestrator
===============================
Ties the pipeline together::

    config strings ──▶ GeneratorConfig
    C# source ──▶ parse_source() ──▶ DeclarationWalker ──▶ body
                                           │
                          imports/exports ─┴─▶ resolve_imports() ──▶ import block

    output = import block + blank line + body

The ``Generator`` class is the programmatic API; the module-level
``generate()`` function is the single entry point used by the web adapter.
Each call runs in its own ``GenerationSession``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from cs2ts.errors import ConfigurationError
from cs2ts.models import CompilationUnit, GeneratorConfig
from cs2ts.parser import parse_source
from cs2ts.resolver import prepend_imports, resolve_import_names, resolve_imports
from cs2ts.session import GenerationSession
from cs2ts.utils import Timer, count_lines
from cs2ts.walker import DeclarationWalker

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts.generator")


# ---------------------------------------------------------------------------
# Generation result
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationResult:
    """
    Output of one ``generate()`` call.

    ``output`` is the TypeScript text; ``warnings`` holds one message per
    construct that could not be translated, in emission order.
    """

    output: str = ""
    warnings: List[str] = field(default_factory=list)

    # Metrics
    exports: List[str] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        lines.append(f"{'='*60}")
        lines.append("  cs2ts - Generation Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Exports:      {len(self.exports)}")
        lines.append(f"  Imports:      {len(self.imports)}")
        lines.append(f"  Output lines: {count_lines(self.output):,}")
        lines.append(f"  Total time:   {self.elapsed_seconds:.3f}s")

        if self.warnings:
            lines.append(f"{'─'*60}")
            lines.append(f"  Warnings ({len(self.warnings)}):")
            for warn in self.warnings:
                lines.append(f"    ⚠ {warn}")

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# YAML configuration files
# ---------------------------------------------------------------------------


def _enum_entries(raw: Any, path: Path) -> Dict[str, Optional[str]]:
    if raw is None:
        return {}
    if isinstance(raw, list):
        return {str(name): None for name in raw}
    if isinstance(raw, dict):
        return {str(name): (None if mode is None else str(mode)) for name, mode in raw.items()}
    raise ConfigurationError(
        f"'enums' in {path} must be a mapping or a list, got {type(raw).__name__}."
    )


def config_from_mapping(data: Dict[str, Any], source: str = "<mapping>") -> GeneratorConfig:
    """
    Build a ``GeneratorConfig`` from a loaded configuration mapping::

        known_types:
          Money: "@shared/money"
        enums:
          Color: keyof
          Size: null

    Raises:
        ConfigurationError: Unknown keys or values of the wrong shape.
    """
    unknown: List[str] = sorted(set(data) - {"known_types", "enums"})
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration key(s) in {source}: {', '.join(unknown)}"
        )

    known_types: Any = data.get("known_types") or {}
    if not isinstance(known_types, dict):
        raise ConfigurationError(
            f"'known_types' in {source} must be a mapping, got {type(known_types).__name__}."
        )

    enums: Dict[str, Optional[str]] = _enum_entries(data.get("enums"), Path(source))
    try:
        return GeneratorConfig(
            known_types={str(k): str(v) for k, v in known_types.items()},
            known_enums=list(enums),
            enum_modes={name: mode for name, mode in enums.items() if mode},
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid configuration in {source}: {exc}") from exc


def load_config_file(path: Path) -> GeneratorConfig:
    """
    Load a YAML configuration file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the file can't be parsed or has the wrong shape.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        text: str = path.read_text(encoding="utf-8")
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a YAML mapping at top level, got {type(data).__name__}."
        )
    logger.debug("Loaded config file %s.", path)
    return config_from_mapping(data, str(path))


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class Generator:
    """
    Translates C# declarations to TypeScript with a fixed configuration.

    Usage::

        gen = Generator(GeneratorConfig.from_strings("Money=@shared/money", "Color:keyof"))
        result = gen.generate(source)
        print(result.output)
    """

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config: GeneratorConfig = config or GeneratorConfig()

    def generate(self, source: str) -> GenerationResult:
        """
        Translate *source*.

        Raises:
            SourceParseError: The source has syntax errors.
        """
        if not source:
            return GenerationResult()

        with Timer("generate") as timer:
            unit: CompilationUnit = parse_source(source)
            result: GenerationResult = self.generate_from_unit(unit)
        result.elapsed_seconds = timer.elapsed
        return result

    def generate_from_unit(self, unit: CompilationUnit) -> GenerationResult:
        """Translate an already parsed compilation unit."""
        session: GenerationSession = GenerationSession(self.config)
        walker: DeclarationWalker = DeclarationWalker(session)

        body: str = walker.emit(unit.members)
        import_block: str = resolve_imports(
            session.imports, session.exports, self.config.known_types
        )

        result = GenerationResult(
            output=prepend_imports(import_block, body),
            warnings=session.warnings,
            exports=sorted(session.exports),
            imports=resolve_import_names(session.imports, session.exports),
        )
        logger.info(
            "Generated %d export(s), %d import(s), %d warning(s).",
            len(result.exports),
            len(result.imports),
            len(result.warnings),
        )
        return result


def generate(source: str, type_map: str = "", enums: str = "") -> GenerationResult:
    """
    Translate C# *source* using the two comma-separated configuration strings.

    Args:
        source: C# source text.
        type_map: ``"Name=path,..."`` import path overrides.
        enums: ``"Name[:mode],..."`` known enums.

    Raises:
        ConfigurationError: A configuration string is malformed.
        SourceParseError: The source has syntax errors.
    """
    config: GeneratorConfig = GeneratorConfig.from_strings(type_map=type_map, enums=enums)
    return Generator(config).generate(source)


__all__: List[str] = [
    "GenerationResult",
    "Generator",
    "config_from_mapping",
    "generate",
    "load_config_file",
]

logger.debug("cs2ts.generator loaded.")
