"""Hash utilities for the build-variant cache key.

The external build step stores its bundles under a directory named after this
digest, so the rules are strict:

Key rules:
- SHA-256 over raw file bytes (no decoding, no newline normalization)
- Files are fed into ONE accumulator in the given order
- Order matters: swapping two inputs changes the digest
- A missing or unreadable input is fatal (no fallback digest)
"""

import hashlib
from pathlib import Path
from typing import Iterable, Union


def compute_files_sha256(paths: Iterable[Union[str, Path]]) -> str:
    """Compute SHA256 over the concatenated bytes of several files.

    Each file's full contents is passed to the same accumulator with a
    separate ``update`` call, in iteration order.

    Args:
        paths: Ordered file paths

    Returns:
        SHA256 hash as hex string (64 chars, no prefix)

    Raises:
        FileNotFoundError: If any file does not exist
        OSError: If any file cannot be read
    """
    digest = hashlib.sha256()
    for path in paths:
        digest.update(Path(path).read_bytes())
    return digest.hexdigest()
