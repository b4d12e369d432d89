"""Attribute the generated bytes of a bundle to its source files."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from .source_map import BundleSourceMap


class BundleSizeError(ValueError):
    """Raised when a source map does not fit the bundle it describes."""


class BundleSizes(BaseModel):
    """Per-source byte breakdown of one bundle.

    ``files`` keeps insertion order: a source appears where its first
    mapping appears in the generated code.
    """
    files: Dict[str, int]
    unmapped_bytes: int = Field(..., alias="unmappedBytes")
    total_bytes: int = Field(..., alias="totalBytes")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def compute_generated_file_sizes(content: str, source_map: BundleSourceMap) -> BundleSizes:
    """Compute how many generated bytes each source file contributes.

    A mapping spans from its generated column to the column of the next
    mapping on the same generated line, or to the end of the line when it is
    the last one. Mappings without a source count as unmapped.

    Args:
        content: Bundle script content
        source_map: Source map of that bundle

    Returns:
        BundleSizes with files, unmapped_bytes and total_bytes

    Raises:
        BundleSizeError: If a mapping points outside the bundle content
        SourceMapError: If the mappings cannot be decoded
    """
    lines = content.split("\n")
    total_bytes = len(content)
    unmapped_bytes = total_bytes
    files: Dict[str, int] = {}

    segments = sorted(
        source_map.segments(),
        key=lambda s: (s.generated_line, s.generated_column),
    )
    label = source_map.file or "bundle"

    for i, segment in enumerate(segments):
        if segment.source_index is None:
            continue
        source = source_map.source_path(segment.source_index)
        if source is None:
            continue

        if segment.generated_line >= len(lines):
            raise BundleSizeError(
                f"{label}: mapping for line out of bounds: {segment.generated_line + 1}"
            )
        line = lines[segment.generated_line]
        if segment.generated_column > len(line):
            raise BundleSizeError(
                f"{label}: mapping for column out of bounds: "
                f"{segment.generated_line + 1}:{segment.generated_column}"
            )

        following = segments[i + 1] if i + 1 < len(segments) else None
        if following is not None and following.generated_line == segment.generated_line:
            if following.generated_column > len(line):
                raise BundleSizeError(
                    f"{label}: mapping for last column out of bounds: "
                    f"{segment.generated_line + 1}:{following.generated_column}"
                )
            mapping_length = following.generated_column - segment.generated_column
        else:
            mapping_length = len(line) - segment.generated_column

        files[source] = files.get(source, 0) + mapping_length
        unmapped_bytes -= mapping_length

    return BundleSizes(files=files, unmapped_bytes=unmapped_bytes, total_bytes=total_bytes)
