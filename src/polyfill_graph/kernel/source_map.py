"""Source map (revision 3) model and Base64 VLQ mappings decoding."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


_BASE64_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES: Dict[str, int] = {char: i for i, char in enumerate(_BASE64_ALPHABET)}

_VLQ_CONTINUATION_BIT = 32
_VLQ_VALUE_MASK = 31
_VLQ_SHIFT = 5


class SourceMapError(ValueError):
    """Raised when a source map's mappings cannot be decoded."""


@dataclass(frozen=True)
class MappingSegment:
    """One decoded mapping segment (all positions 0-based)."""
    generated_line: int
    generated_column: int
    source_index: Optional[int] = None
    source_line: Optional[int] = None
    source_column: Optional[int] = None
    name_index: Optional[int] = None


class BundleSourceMap(BaseModel):
    """Parsed source map of a bundle.

    Only ``sources`` and ``mappings`` drive the size computation; the other
    standard fields are kept for diagnostics.
    """
    version: int = 3
    file: Optional[str] = None
    source_root: Optional[str] = Field(None, alias="sourceRoot")
    sources: List[Optional[str]]
    names: List[str] = Field(default_factory=list)
    mappings: str = ""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def source_path(self, index: int) -> Optional[str]:
        """Return sources[index] as written, without applying sourceRoot.

        Per-polyfill maps and the combined map are keyed by the same raw
        paths, so sourceRoot never takes part in matching.
        """
        if index < 0 or index >= len(self.sources):
            raise SourceMapError(
                f"Mapping references source index {index}, map has {len(self.sources)} sources"
            )
        return self.sources[index]

    def segments(self) -> List[MappingSegment]:
        return decode_mappings(self.mappings)


def decode_vlq(segment: str) -> List[int]:
    """Decode one comma-free Base64 VLQ segment into signed integers."""
    values: List[int] = []
    value = 0
    shift = 0
    for char in segment:
        digit = _BASE64_VALUES.get(char)
        if digit is None:
            raise SourceMapError(f"Invalid base64 character {char!r} in mappings")
        value += (digit & _VLQ_VALUE_MASK) << shift
        if digit & _VLQ_CONTINUATION_BIT:
            shift += _VLQ_SHIFT
            continue
        negative = value & 1
        value >>= 1
        values.append(-value if negative else value)
        value = 0
        shift = 0
    if shift:
        raise SourceMapError(f"Truncated VLQ value in segment {segment!r}")
    return values


def decode_mappings(mappings: str) -> List[MappingSegment]:
    """Decode a ``mappings`` string into segments, in generated order.

    Generated columns are relative within a line; source index, source
    line/column and name index are relative across the whole map.
    """
    segments: List[MappingSegment] = []
    source_index = 0
    source_line = 0
    source_column = 0
    name_index = 0

    for line_number, line in enumerate(mappings.split(";")):
        generated_column = 0
        for raw in line.split(","):
            if not raw:
                continue
            fields = decode_vlq(raw)
            if len(fields) not in (1, 4, 5):
                raise SourceMapError(
                    f"Segment {raw!r} on generated line {line_number + 1} has {len(fields)} fields"
                )
            generated_column += fields[0]
            if len(fields) == 1:
                segments.append(MappingSegment(line_number, generated_column))
                continue
            source_index += fields[1]
            source_line += fields[2]
            source_column += fields[3]
            segment_name: Optional[int] = None
            if len(fields) == 5:
                name_index += fields[4]
                segment_name = name_index
            segments.append(MappingSegment(
                generated_line=line_number,
                generated_column=generated_column,
                source_index=source_index,
                source_line=source_line,
                source_column=source_column,
                name_index=segment_name,
            ))
    return segments
