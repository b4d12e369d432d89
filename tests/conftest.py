"""Pytest configuration and builders for fake scripts directories.

A scripts directory mirrors what the external build step leaves behind:
yarn.lock, run.js, main.js and variants/<hash>/... bundles with source maps.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from polyfill_graph.api import compute_variant_hash
from polyfill_graph.catalog import PolyfillCatalogEntry
from polyfill_graph._internal.io.variants import VariantPaths


_BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def encode_vlq(value: int) -> str:
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = ""
    while True:
        digit = vlq & 31
        vlq >>= 5
        if vlq:
            digit |= 32
        encoded += _BASE64_ALPHABET[digit]
        if not vlq:
            return encoded


def encode_mappings(lines: Sequence[Sequence[Tuple[int, ...]]]) -> str:
    """Encode (generated_column[, source_index, source_line, source_column]) per line."""
    previous = [0, 0, 0]
    encoded_lines = []
    for segments in lines:
        previous_column = 0
        encoded_segments = []
        for segment in segments:
            parts = [encode_vlq(segment[0] - previous_column)]
            previous_column = segment[0]
            if len(segment) > 1:
                for i, value in enumerate(segment[1:4]):
                    parts.append(encode_vlq(value - previous[i]))
                    previous[i] = value
            encoded_segments.append("".join(parts))
        encoded_lines.append(",".join(encoded_segments))
    return ";".join(encoded_lines)


def sized_bundle(files: Sequence[Tuple[str, int]]) -> Tuple[str, dict]:
    """One-line bundle where each (source, size) covers exactly size bytes."""
    sources = [source for source, _ in files]
    content = ""
    segments = []
    for index, (_, size) in enumerate(files):
        segments.append((len(content), index, 0, 0))
        content += chr(ord("a") + index % 26) * size
    source_map = {
        "version": 3,
        "file": "main.bundle.min.js",
        "sources": sources,
        "names": [],
        "mappings": encode_mappings([segments]),
    }
    return content, source_map


class ScriptsDir:
    """Writes a fake legacy JavaScript scripts directory under root."""

    def __init__(self, root: Path):
        self.root = root
        self.paths = VariantPaths(root=root)
        root.mkdir(parents=True, exist_ok=True)
        (root / "yarn.lock").write_text("core-js@3.6.5\n", encoding="utf-8")
        (root / "run.js").write_text("// run variants\n", encoding="utf-8")
        (root / "main.js").write_text("// entry\n", encoding="utf-8")

    @property
    def variant_hash(self) -> str:
        return compute_variant_hash(self.paths)

    def add_polyfill(self, module_id: str, sources: List[str], source_root: Optional[str] = None) -> Path:
        map_path = self.paths.polyfill_map_path(self.variant_hash, module_id)
        map_path.parent.mkdir(parents=True, exist_ok=True)
        data = {"version": 3, "sources": sources, "names": [], "mappings": ""}
        if source_root is not None:
            data["sourceRoot"] = source_root
        map_path.write_text(json.dumps(data), encoding="utf-8")
        return map_path

    def add_combined_bundle(self, files: Sequence[Tuple[str, int]], source_root: Optional[str] = None) -> Path:
        content, source_map = sized_bundle(files)
        if source_root is not None:
            source_map["sourceRoot"] = source_root
        bundle_path = self.paths.combined_bundle_path(self.variant_hash)
        bundle_path.parent.mkdir(parents=True, exist_ok=True)
        bundle_path.write_text(content, encoding="utf-8")
        bundle_path.with_name(bundle_path.name + ".map").write_text(
            json.dumps(source_map), encoding="utf-8"
        )
        return bundle_path

    def build(
        self,
        polyfills: Dict[str, Tuple[str, List[str]]],
        combined: Sequence[Tuple[str, int]],
        source_root: Optional[str] = None,
    ) -> List[PolyfillCatalogEntry]:
        """Write every variant and return the matching catalog."""
        catalog = []
        for name, (module_id, sources) in polyfills.items():
            self.add_polyfill(module_id, sources, source_root=source_root)
            catalog.append(PolyfillCatalogEntry(name=name, core_js3_module=module_id))
        self.add_combined_bundle(combined, source_root=source_root)
        return catalog


@pytest.fixture
def scripts_dir(tmp_path) -> ScriptsDir:
    return ScriptsDir(tmp_path / "legacy-javascript")


@pytest.fixture
def two_polyfill_catalog(scripts_dir) -> List[PolyfillCatalogEntry]:
    """A needs x, y; B needs x, z; combined bundle is webpack runtime + x, y, z."""
    return scripts_dir.build(
        {
            "A": ("es.a", ["webpack/bootstrap", "node_modules/x", "node_modules/y", "src/main.js"]),
            "B": ("es.b", ["webpack/bootstrap", "node_modules/x", "node_modules/z", "src/main.js"]),
        },
        [
            ("webpack/bootstrap", 5),
            ("node_modules/x", 10),
            ("node_modules/y", 20),
            ("node_modules/z", 30),
        ],
    )
