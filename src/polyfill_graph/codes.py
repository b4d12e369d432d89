"""Issue code constants for polyfill graph generation.

These constants prevent stringly-typed issue codes in results and in the
CLI's diagnostics.
"""

from enum import Enum


class GraphCode(str, Enum):
    """Warning codes attached to a generation result (non-blocking)."""

    # Per-polyfill module missing from the combined bundle, encoded as -1
    MODULE_NOT_IN_COMBINED_BUNDLE = "MODULE_NOT_IN_COMBINED_BUNDLE"
    # Common module missing from the combined bundle size table, counted as 0
    COMMON_MODULE_UNSIZED = "COMMON_MODULE_UNSIZED"
    # Catalog has no entries; output has no dependencies and baseSize 0
    EMPTY_CATALOG = "EMPTY_CATALOG"
