"""Build the polyfill dependency graph data from per-polyfill module lists.

All functions here are pure: inputs are never mutated, every mapping is
built once from its inputs.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


THIRD_PARTY_PREFIX = "node_modules"
COMMON_KEY = "common"
NOT_FOUND_INDEX = -1


class GraphDataError(ValueError):
    """Raised when dependency data cannot form a graph."""


class PolyfillDependencyGraphData(BaseModel):
    """Serialized graph consumed by the legacy JavaScript analysis.

    - moduleSizes: byte size per third-party module, indexed by position
    - dependencies: polyfill name -> indices into moduleSizes (common excluded)
    - maxSize: sum of moduleSizes
    - baseSize: bytes of the modules every polyfill needs
    """
    module_sizes: List[int] = Field(..., alias="moduleSizes")
    dependencies: Dict[str, List[int]]
    max_size: int = Field(..., alias="maxSize")
    base_size: int = Field(..., alias="baseSize")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_json_dict(self) -> dict:
        """Dump with wire field names, in wire order."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class GraphBuild:
    """Graph data plus the intermediate facts needed for diagnostics."""
    data: PolyfillDependencyGraphData
    common_modules: Tuple[str, ...]
    module_index: Tuple[str, ...]
    # polyfill name -> modules absent from module_index (encoded as NOT_FOUND_INDEX)
    unindexed_modules: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    # common modules with no entry in the size table (counted as 0)
    unsized_common_modules: Tuple[str, ...] = ()


def filter_third_party(sources: Iterable[Optional[str]], prefix: str = THIRD_PARTY_PREFIX) -> Tuple[str, ...]:
    """Keep third-party paths, first occurrence order, no duplicates."""
    seen = set()
    kept: List[str] = []
    for source in sources:
        if source is None or not source.startswith(prefix) or source in seen:
            continue
        seen.add(source)
        kept.append(source)
    return tuple(kept)


def split_common_modules(
    dependencies: Mapping[str, Sequence[str]],
) -> Tuple[Tuple[str, ...], Dict[str, Tuple[str, ...]]]:
    """Factor the modules shared by every polyfill out of each polyfill.

    Args:
        dependencies: polyfill name -> module paths

    Returns:
        (common, stripped) where common is the intersection of all module
        lists (ordered as in the first polyfill) and stripped maps every
        polyfill to its modules minus common. An empty input yields an empty
        common tuple and an empty mapping.
    """
    if not dependencies:
        return (), {}

    module_sets = [set(modules) for modules in dependencies.values()]
    first = next(iter(dependencies.values()))
    common = tuple(
        module for module in dict.fromkeys(first)
        if all(module in modules for modules in module_sets)
    )
    common_set = set(common)
    stripped = {
        name: tuple(module for module in modules if module not in common_set)
        for name, modules in dependencies.items()
    }
    return common, stripped


def encode_dependencies(
    dependencies: Mapping[str, Sequence[str]],
    module_index: Sequence[str],
) -> Tuple[Dict[str, List[int]], Dict[str, Tuple[str, ...]]]:
    """Replace module paths with their positions in module_index.

    Returns:
        (encoded, unindexed): encoded maps polyfill name -> indices, with
        NOT_FOUND_INDEX for paths missing from module_index; unindexed lists
        those missing paths per polyfill (only polyfills that have some).
    """
    positions: Dict[str, int] = {}
    for i, module in enumerate(module_index):
        positions.setdefault(module, i)

    encoded: Dict[str, List[int]] = {}
    unindexed: Dict[str, Tuple[str, ...]] = {}
    for name, modules in dependencies.items():
        encoded[name] = [positions.get(module, NOT_FOUND_INDEX) for module in modules]
        missing = tuple(module for module in modules if module not in positions)
        if missing:
            unindexed[name] = missing
    return encoded, unindexed


def build_graph_data(
    dependencies: Mapping[str, Sequence[str]],
    file_sizes: Mapping[str, int],
    prefix: str = THIRD_PARTY_PREFIX,
) -> GraphBuild:
    """Build the graph from per-polyfill modules and the combined bundle sizes.

    Args:
        dependencies: polyfill name -> third-party module paths
        file_sizes: source path -> bytes, from the combined bundle; its key
            order defines the module index
        prefix: third-party path prefix

    Raises:
        GraphDataError: If a polyfill is named like the reserved common key
    """
    if COMMON_KEY in dependencies:
        raise GraphDataError(
            f"Polyfill name {COMMON_KEY!r} is reserved for the shared module bucket"
        )

    common, stripped = split_common_modules(dependencies)

    module_index = tuple(path for path in file_sizes if path.startswith(prefix))
    module_sizes = [file_sizes[path] for path in module_index]
    encoded, unindexed = encode_dependencies(stripped, module_index)

    unsized = tuple(module for module in common if module not in file_sizes)
    base_size = sum(file_sizes.get(module, 0) for module in common)

    data = PolyfillDependencyGraphData(
        module_sizes=module_sizes,
        dependencies=encoded,
        max_size=sum(module_sizes),
        base_size=base_size,
    )
    return GraphBuild(
        data=data,
        common_modules=common,
        module_index=module_index,
        unindexed_modules=unindexed,
        unsized_common_modules=unsized,
    )
