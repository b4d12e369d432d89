"""Locate and load build-variant bundles produced by the external build step."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError

from polyfill_graph.catalog import CATALOG_MODULE_PATH
from polyfill_graph.kernel.source_map import BundleSourceMap


BUNDLE_FILENAME = "main.bundle.min.js"
SINGLE_POLYFILL_GROUP = "core-js-3-only-polyfill"
ALL_POLYFILLS_GROUP = "all-legacy-polyfills"
ALL_POLYFILLS_VARIANT = "all-legacy-polyfills-core-js-3"
OUTPUT_FILENAME = "polyfill-graph-data.json"

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]+")


class VariantBundleError(ValueError):
    """Raised when a variant bundle or its source map cannot be loaded."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


@dataclass(frozen=True)
class VariantPaths:
    """Fixed file layout of the legacy JavaScript scripts directory.

    root/
      yarn.lock, run.js, main.js        cache key inputs (with the catalog module)
      variants/<hash>/...               bundles written by the build step
      polyfill-graph-data.json          default output
    """
    root: Path
    catalog_module: Path = CATALOG_MODULE_PATH
    output: Optional[Path] = None

    @property
    def lockfile(self) -> Path:
        return self.root / "yarn.lock"

    @property
    def run_script(self) -> Path:
        return self.root / "run.js"

    @property
    def main_script(self) -> Path:
        return self.root / "main.js"

    @property
    def output_path(self) -> Path:
        return self.output if self.output is not None else self.root / OUTPUT_FILENAME

    def hash_inputs(self) -> Tuple[Path, ...]:
        """Cache key inputs, in hashing order."""
        return (self.lockfile, self.run_script, self.main_script, self.catalog_module)

    def variant_dir(self, variant_hash: str) -> Path:
        return self.root / "variants" / variant_hash

    def polyfill_map_path(self, variant_hash: str, module_id: str) -> Path:
        folder = sanitize_module_id(module_id)
        return (
            self.variant_dir(variant_hash) / SINGLE_POLYFILL_GROUP / folder
            / f"{BUNDLE_FILENAME}.map"
        )

    def combined_bundle_path(self, variant_hash: str) -> Path:
        return (
            self.variant_dir(variant_hash) / ALL_POLYFILLS_GROUP / ALL_POLYFILLS_VARIANT
            / BUNDLE_FILENAME
        )


def sanitize_module_id(module_id: str) -> str:
    """Replace each run of non-alphanumeric characters with a single '-'."""
    return _NON_ALPHANUMERIC.sub("-", module_id)


def load_source_map(path: Path) -> BundleSourceMap:
    """Load and validate a source map file."""
    if not path.exists():
        raise VariantBundleError(f"Missing source map: {path}", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise VariantBundleError(f"Malformed source map JSON in {path}: {e}", path) from e
    try:
        return BundleSourceMap.model_validate(data)
    except ValidationError as e:
        raise VariantBundleError(f"Invalid source map {path}: {e}", path) from e


def load_bundle(path: Path) -> Tuple[str, BundleSourceMap]:
    """Load a bundle's script content and its sibling ``.map`` file."""
    if not path.exists():
        raise VariantBundleError(f"Missing bundle: {path}", path)
    content = path.read_text(encoding="utf-8")
    source_map = load_source_map(path.with_name(path.name + ".map"))
    return content, source_map
