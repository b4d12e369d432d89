"""Public API for polyfill graph generation.

High-level functions that return complete, structured results.
The CLI is a thin wrapper over these functions.
"""

import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from polyfill_graph.catalog import PolyfillCatalogEntry, get_polyfill_data
from polyfill_graph.codes import GraphCode
from polyfill_graph.kernel.bundle_sizes import BundleSizes, compute_generated_file_sizes
from polyfill_graph.kernel.graph_data import (
    GraphBuild,
    GraphDataError,
    PolyfillDependencyGraphData,
    build_graph_data,
    filter_third_party,
)
from polyfill_graph.kernel.hash_utils import compute_files_sha256
from polyfill_graph._internal.io.variants import VariantPaths, load_bundle, load_source_map
from polyfill_graph._internal.pretty_json import pretty_dumps


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


class GraphIssue(BaseModel):
    """A single non-blocking issue found while building the graph."""
    code: GraphCode
    message: str
    polyfill: Optional[str] = None  # Polyfill name, for per-polyfill issues
    module: Optional[str] = None  # Module path the issue is about


class GenerationResult(BaseModel):
    """Result of a graph generation run."""
    variant_hash: str
    output_path: Optional[str] = None  # None when the data was not written
    data: PolyfillDependencyGraphData
    common_modules: List[str]
    warnings: List[GraphIssue] = Field(default_factory=list)


def compute_variant_hash(paths: VariantPaths) -> str:
    """Compute the build-variant cache key for a scripts directory.

    Hashes yarn.lock, run.js, main.js and the catalog module, in that order.

    Raises:
        FileNotFoundError: If any of the inputs is missing
    """
    return compute_files_sha256(paths.hash_inputs())


def discover_polyfill_dependencies(
    catalog: Iterable[PolyfillCatalogEntry],
    paths: VariantPaths,
    variant_hash: str,
) -> Dict[str, Tuple[str, ...]]:
    """Read each polyfill's variant source map and keep its third-party sources.

    Raises:
        VariantBundleError: If a source map is missing or malformed
        GraphDataError: If two catalog entries share a name
    """
    dependencies: Dict[str, Tuple[str, ...]] = {}
    for entry in catalog:
        if entry.name in dependencies:
            raise GraphDataError(f"Duplicate polyfill name in catalog: {entry.name}")
        map_path = paths.polyfill_map_path(variant_hash, entry.core_js3_module)
        source_map = load_source_map(map_path)
        dependencies[entry.name] = filter_third_party(source_map.sources)
    return dependencies


def compute_combined_bundle_sizes(paths: VariantPaths, variant_hash: str) -> BundleSizes:
    """Size every source file of the all-polyfills bundle."""
    content, source_map = load_bundle(paths.combined_bundle_path(variant_hash))
    return compute_generated_file_sizes(content, source_map)


def _collect_warnings(build: GraphBuild, polyfill_count: int) -> List[GraphIssue]:
    warnings: List[GraphIssue] = []
    if polyfill_count == 0:
        warnings.append(GraphIssue(
            code=GraphCode.EMPTY_CATALOG,
            message="Polyfill catalog is empty; no dependencies emitted",
        ))
    for name, modules in build.unindexed_modules.items():
        for module in modules:
            warnings.append(GraphIssue(
                code=GraphCode.MODULE_NOT_IN_COMBINED_BUNDLE,
                message=(
                    f"{name} depends on {module}, which is absent from the combined bundle; "
                    f"encoded as -1"
                ),
                polyfill=name,
                module=module,
            ))
    for module in build.unsized_common_modules:
        warnings.append(GraphIssue(
            code=GraphCode.COMMON_MODULE_UNSIZED,
            message=f"Common module {module} is absent from the combined bundle; counted as 0 bytes",
            module=module,
        ))
    return warnings


def build_polyfill_graph(
    paths: VariantPaths,
    catalog: Optional[Iterable[PolyfillCatalogEntry]] = None,
) -> GenerationResult:
    """Build the polyfill dependency graph without writing it.

    Args:
        paths: Scripts directory layout
        catalog: Polyfill entries (defaults to the built-in catalog)

    Returns:
        GenerationResult with the graph data and warnings

    Raises:
        FileNotFoundError: If a cache key input is missing
        VariantBundleError: If a bundle or source map is missing or malformed
        BundleSizeError: If the combined source map does not fit its bundle
        GraphDataError: If the catalog cannot form a graph
    """
    entries = tuple(catalog) if catalog is not None else get_polyfill_data()
    variant_hash = compute_variant_hash(paths)

    dependencies = discover_polyfill_dependencies(entries, paths, variant_hash)
    sizes = compute_combined_bundle_sizes(paths, variant_hash)
    build = build_graph_data(dependencies, sizes.files)

    return GenerationResult(
        variant_hash=variant_hash,
        data=build.data,
        common_modules=list(build.common_modules),
        warnings=_collect_warnings(build, len(entries)),
    )


def write_polyfill_graph(data: PolyfillDependencyGraphData, path: Union[str, os.PathLike, Path]) -> Path:
    """Write graph data to path, replacing any previous content.

    The text goes to a sibling temp file first, then replaces the target, so
    a failed write never leaves a truncated output behind.
    """
    output_path = _normalize_path(path)
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    try:
        tmp_path.write_text(pretty_dumps(data.to_json_dict()) + "\n", encoding="utf-8")
        os.replace(tmp_path, output_path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    return output_path


def generate_polyfill_graph(
    root: Union[str, os.PathLike, Path],
    output: Optional[Union[str, os.PathLike, Path]] = None,
    catalog: Optional[Iterable[PolyfillCatalogEntry]] = None,
) -> GenerationResult:
    """Build the graph for a scripts directory and write it.

    Nothing is written unless every input loads; rerunning is safe.

    Args:
        root: Scripts directory (holds yarn.lock, run.js, main.js, variants/)
        output: Output file (defaults to root/polyfill-graph-data.json)
        catalog: Polyfill entries (defaults to the built-in catalog)
    """
    paths = VariantPaths(
        root=_normalize_path(root),
        output=_normalize_path(output) if output is not None else None,
    )
    result = build_polyfill_graph(paths, catalog=catalog)
    written = write_polyfill_graph(result.data, paths.output_path)
    return result.model_copy(update={"output_path": str(written)})


def load_polyfill_graph(path: Union[str, os.PathLike, Path]) -> PolyfillDependencyGraphData:
    """Load a previously written graph data file."""
    return PolyfillDependencyGraphData.model_validate_json(
        _normalize_path(path).read_text(encoding="utf-8")
    )
