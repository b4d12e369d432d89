"""Tests for source map parsing and VLQ mappings decoding."""

import pytest

from polyfill_graph.kernel.source_map import (
    BundleSourceMap,
    MappingSegment,
    SourceMapError,
    decode_mappings,
    decode_vlq,
)

from conftest import encode_mappings


class TestDecodeVlq:
    def test_zeroes(self):
        assert decode_vlq("AAAA") == [0, 0, 0, 0]

    def test_small_values(self):
        assert decode_vlq("AACA") == [0, 0, 1, 0]
        assert decode_vlq("C") == [1]
        assert decode_vlq("D") == [-1]

    def test_continuation(self):
        """'g' carries a continuation bit: 'gB' is 16."""
        assert decode_vlq("gB") == [16]

    def test_invalid_character(self):
        with pytest.raises(SourceMapError, match="Invalid base64 character"):
            decode_vlq("A!A")

    def test_truncated_value(self):
        with pytest.raises(SourceMapError, match="Truncated"):
            decode_vlq("g")


class TestDecodeMappings:
    def test_generated_column_resets_per_line(self):
        segments = decode_mappings("AAAA,KAAC;AACA")
        assert segments == [
            MappingSegment(0, 0, 0, 0, 0),
            MappingSegment(0, 5, 0, 0, 1),
            MappingSegment(1, 0, 0, 1, 1),
        ]

    def test_source_fields_are_cumulative_across_lines(self):
        mappings = encode_mappings([[(0, 0, 0, 0), (4, 1, 3, 2)], [(2, 1, 7, 0)]])
        segments = decode_mappings(mappings)
        assert [(s.generated_line, s.generated_column, s.source_index, s.source_line) for s in segments] == [
            (0, 0, 0, 0),
            (0, 4, 1, 3),
            (1, 2, 1, 7),
        ]

    def test_single_field_segment_has_no_source(self):
        segments = decode_mappings("AAAA,E")
        assert segments[1] == MappingSegment(0, 2)
        assert segments[1].source_index is None

    def test_name_index(self):
        segments = decode_mappings("AAAAA,CAAAC")
        assert [s.name_index for s in segments] == [0, 1]

    def test_empty_lines_skipped(self):
        segments = decode_mappings(";;AAAA")
        assert segments == [MappingSegment(2, 0, 0, 0, 0)]

    def test_bad_field_count(self):
        with pytest.raises(SourceMapError, match="has 2 fields"):
            decode_mappings("AA")


class TestBundleSourceMap:
    def test_parses_camel_case_fields(self):
        source_map = BundleSourceMap.model_validate({
            "version": 3,
            "sourceRoot": "webpack://",
            "sources": ["node_modules/a.js"],
            "sourcesContent": ["ignored"],
            "mappings": "AAAA",
        })
        assert source_map.source_root == "webpack://"
        assert source_map.sources == ["node_modules/a.js"]

    def test_source_path_ignores_root(self):
        source_map = BundleSourceMap(sources=["node_modules/a.js"], sourceRoot="/")
        assert source_map.source_path(0) == "node_modules/a.js"
        source_map = BundleSourceMap(sources=["node_modules/a.js"], sourceRoot="webpack:///")
        assert source_map.source_path(0) == "node_modules/a.js"

    def test_source_path_null_source(self):
        source_map = BundleSourceMap(sources=[None])
        assert source_map.source_path(0) is None

    def test_source_path_out_of_range(self):
        source_map = BundleSourceMap(sources=["a.js"])
        with pytest.raises(SourceMapError, match="source index 3"):
            source_map.source_path(3)

    def test_sources_required(self):
        with pytest.raises(ValueError):
            BundleSourceMap.model_validate({"version": 3, "mappings": ""})
