"""Shared test fixtures."""

from pathlib import Path

import pytest

from jdex_garden.config import GardenConfig
from jdex_garden.core.hierarchy.parser import parse_system
from jdex_garden.core.hierarchy.resolver import resolve_system
from jdex_garden.models.node import ResolvedSystem
from tests.unit.fakes import FakeFileSystem, RecordingRenderer

EXAMPLE_HIERARCHY = "\n".join(
    [
        "00-09 System",
        "\t00 Meta",
        "\t\t00 !JDex",
        "\t\t01 -System Inbox",
        "\t\t02 WIP",
        "\t\t08 +Someday",
        "\t01 System Documentation",
        "\t\t10 -Tools",
        "",
        "10-19 Technology",
        "\t10 Software Engineering",
        "\t\t00 +Inbox",
        "\t\t10 Snippets",
        "\t\t\tX01 Rust",
        "\t11 AI",
        "\t\t10 LLMs",
        "30-39 Reviews",
        "\t31 Films/Movies",
    ]
)

NOTES = Path("/garden/notes")
ARCHIVE = Path("/garden/archive")
SYSTEM_DIR = NOTES / "N01"
META_DIR = SYSTEM_DIR / "N01.00-09 System" / "N01.00 Meta"
SNIPPETS_DIR = (
    SYSTEM_DIR / "N01.10-19 Technology" / "N01.10 Software Engineering" / "N01.10.10 Snippets"
)


@pytest.fixture
def example_system() -> ResolvedSystem:
    """Return the example hierarchy, parsed and resolved."""
    return resolve_system(parse_system("N01", "Demo System", EXAMPLE_HIERARCHY))


@pytest.fixture
def example_config() -> GardenConfig:
    """Return a config for the example hierarchy with both roots set."""
    return GardenConfig(
        system_id="N01",
        name="Demo System",
        base_folder=NOTES,
        hierarchy=EXAMPLE_HIERARCHY,
        reference_folder=ARCHIVE,
    )


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Return an in-memory filesystem where only /garden exists."""
    return FakeFileSystem(dirs=("/", "/garden"))


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()
