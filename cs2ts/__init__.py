# File: cs2ts/__init__.py
"""
cs2ts - C# to TypeScript declaration translator
===============================================

Translates C# classes, interfaces, structs and enums into TypeScript
declarations.  Property names are camel-cased, generics, nullability,
enum values and ``<summary>`` documentation are preserved, and anything
that cannot be translated is reported as a warning with an inline
placeholder instead of failing the run.

Architecture overview::

    ┌──────────────┐     ┌───────────────┐     ┌──────────────────┐
    │  CLI / Web   │────▶│   Generator   │────▶│  parse_source    │
    │ (cli, web)   │     │ (generator.py)│     │  (tree-sitter)   │
    └──────────────┘     └───────┬───────┘     └──────────────────┘
                                 │
                    ┌────────────┼──────────────┐
                    ▼            ▼              ▼
             ┌────────────┐ ┌────────────┐ ┌──────────┐
             │   walker   │ │  resolver  │ │  models  │
             └─────┬──────┘ └────────────┘ └──────────┘
                   │
       ┌───────────┼────────────┬─────────────┐
       ▼           ▼            ▼             ▼
  type_mapper  expressions    trivia     diagnostics

Usage::

    # As a library
    from cs2ts import generate
    result = generate(source, type_map="Money=@shared/money", enums="Color:keyof")
    print(result.output)

    # From the command line
    cs2ts -s Models.cs -o models.ts

Public API:
    - generate           - Single entry point (source + config strings)
    - Generator          - Reusable translator bound to a GeneratorConfig
    - GeneratorConfig    - Known types / known enums settings model
    - GenerationResult   - Output text and warning list
    - parse_source       - C# source to declaration tree
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from cs2ts.errors import ConfigurationError, Cs2TsError, SourceParseError
from cs2ts.generator import (
    GenerationResult,
    Generator,
    generate,
    load_config_file,
)
from cs2ts.models import GeneratorConfig
from cs2ts.parser import parse_source

__all__ = [
    "__version__",
    "ConfigurationError",
    "Cs2TsError",
    "GenerationResult",
    "Generator",
    "GeneratorConfig",
    "SourceParseError",
    "generate",
    "load_config_file",
    "parse_source",
]
