"""Scaffold a Johnny-Decimal system of folders and markdown notes."""

from jdex_garden.config import GardenConfig, load_config
from jdex_garden.core.materialize.executor import execute_plan
from jdex_garden.core.materialize.planner import build_plans, plan_materialization
from jdex_garden.filesystem import LocalFileSystem
from jdex_garden.protocols import FileSystemProtocol, RendererProtocol

__version__ = "0.1.0"

__all__ = [
    "FileSystemProtocol",
    "GardenConfig",
    "LocalFileSystem",
    "RendererProtocol",
    "build_plans",
    "execute_plan",
    "load_config",
    "plan_materialization",
]
