"""
tests/conftest.py
Shared fixtures for the cs2ts test suite.

Unit tests build declaration trees by hand; end-to-end tests go through the
tree-sitter parser with the C# snippets defined here.  Real file I/O happens
inside pytest's tmp_path directories.
"""

from __future__ import annotations

import logging
import pathlib
import textwrap
from typing import Callable, Dict

import pytest
import yaml

from cs2ts.models import GeneratorConfig
from cs2ts.session import GenerationSession


# ---------------------------------------------------------------------------
# C# sources
# ---------------------------------------------------------------------------

CUSTOMER_SOURCE: str = textwrap.dedent(
    """\
    namespace Shop
    {
        /// <summary>
        /// A customer of the shop.
        /// </summary>
        public class Customer : Entity
        {
            /// <summary>Display name.</summary>
            public string Name { get; set; }
            public int? Age { get; set; }
            public List<Order> Orders { get; set; }
            public static int Count { get; set; }
            public override string Label { get; set; }
            internal string Secret { get; set; }
        }

        public enum Color
        {
            Red = 1,
            Green,
            Blue = 1 << 2,
        }
    }
    """
)

ATTRIBUTE_SOURCE: str = textwrap.dedent(
    """\
    public class JsonNameAttribute : Attribute
    {
        public string Name { get; set; }
    }

    public static class Helpers
    {
        public static string Name { get; set; }
    }

    public class Visible
    {
        public bool Flag { get; set; }
    }
    """
)


@pytest.fixture()
def customer_source() -> str:
    return CUSTOMER_SOURCE


@pytest.fixture()
def attribute_source() -> str:
    return ATTRIBUTE_SOURCE


# ---------------------------------------------------------------------------
# Configuration / session fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config() -> GeneratorConfig:
    """An empty configuration."""
    return GeneratorConfig()


@pytest.fixture()
def session(config: GeneratorConfig) -> GenerationSession:
    return GenerationSession(config)


@pytest.fixture()
def make_session() -> Callable[..., GenerationSession]:
    """Factory: ``make_session(type_map="...", enums="...")``."""

    def _factory(type_map: str = "", enums: str = "") -> GenerationSession:
        return GenerationSession(GeneratorConfig.from_strings(type_map=type_map, enums=enums))

    return _factory


# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def source_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """Write CUSTOMER_SOURCE to a temporary .cs file."""
    path = tmp_path / "Customer.cs"
    path.write_text(CUSTOMER_SOURCE, encoding="utf-8")
    return path


@pytest.fixture()
def config_dict() -> Dict[str, object]:
    return {
        "known_types": {"Entity": "@shared/entity"},
        "enums": {"Color": "keyof", "Size": None},
    }


@pytest.fixture()
def config_yaml_path(config_dict: Dict[str, object], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write config_dict to a temporary YAML file and return its path."""
    path = tmp_path / "cs2ts.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(config_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_cs2ts_logger():
    """Undo the handler/propagation changes cli_main makes to the cs2ts logger."""
    yield
    root_logger = logging.getLogger("cs2ts")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
