"""Module dependency graph: adjacency structure and construction."""

from .builder import build_module_graph
from .models import ModuleGraph

__all__ = ["ModuleGraph", "build_module_graph"]
