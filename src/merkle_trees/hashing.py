"""
Hashing primitives shared by the Merkle tree variants.

Values are turned into a canonical string before hashing. Node hashes are
plain integers; two of them are combined by sorting their decimal string
forms lexicographically (string order, not numeric order), concatenating
and hashing the result. The default hash is 64-bit xxHash with a fixed
seed: fast and deterministic, but *not* collision resistant, so it is only
suitable for non-adversarial use.
"""

from __future__ import annotations

from typing import Any, Callable, Union

import xxhash

HashInput = Union[str, bytes]
HashFunction = Callable[[HashInput], int]

DEFAULT_SEED = 0


class CanonicalizationError(TypeError):
    """Raised when a value has no stable string form to hash."""


def xxh64_hash(data: HashInput, seed: int = DEFAULT_SEED) -> int:
    """Return the unsigned 64-bit xxHash of ``data`` (str is UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return xxhash.xxh64_intdigest(data, seed=seed)


def canonical_string(value: Any) -> HashInput:
    """
    Convert ``value`` to the form that gets hashed.

    Strings and bytes are used as-is; everything else goes through
    ``str()``. Objects that only have the identity-based ``object`` repr
    are rejected, since their string form changes from run to run.

    Raises:
        CanonicalizationError: If the value cannot be converted.
    """
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, bytearray):
        return bytes(value)

    cls = type(value)
    if cls.__str__ is object.__str__ and cls.__repr__ is object.__repr__:
        raise CanonicalizationError(
            f"{cls.__name__} instances have no stable string form; define __str__ or __repr__"
        )
    try:
        return str(value)
    except Exception as exc:
        raise CanonicalizationError(f"Cannot convert {cls.__name__} value to a string: {exc}") from exc


def parent_hash_string(left: int, right: int) -> str:
    """Concatenate the string forms of two node hashes in lexicographic order."""
    return "".join(sorted((str(left), str(right))))


def hash_parents(left: int, right: int, hash_function: HashFunction = xxh64_hash) -> int:
    """Combine two node hashes into their parent hash."""
    return hash_function(parent_hash_string(left, right))


def hash_value(value: Any, hash_function: HashFunction = xxh64_hash) -> int:
    """Leaf key of ``value``."""
    return hash_function(canonical_string(value))
