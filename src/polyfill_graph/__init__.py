"""polyfill_graph: bundle weight estimation data for legacy JavaScript polyfills."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("polyfill-graph")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from polyfill_graph.api import (
    GenerationResult,
    GraphIssue,
    build_polyfill_graph,
    compute_variant_hash,
    generate_polyfill_graph,
    load_polyfill_graph,
)
from polyfill_graph.catalog import PolyfillCatalogEntry
from polyfill_graph.codes import GraphCode
from polyfill_graph.kernel.graph_data import PolyfillDependencyGraphData

__all__ = [
    "__version__",
    "GenerationResult",
    "GraphIssue",
    "GraphCode",
    "PolyfillCatalogEntry",
    "PolyfillDependencyGraphData",
    "build_polyfill_graph",
    "compute_variant_hash",
    "generate_polyfill_graph",
    "load_polyfill_graph",
]
