"""ID and value generators (CUID primary keys, random filename suffixes)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2) for primary keys."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_file_suffix(upper_bound: int = 1_000_000_000) -> int:
    """Random integer used to keep stored attachment names unique within a millisecond."""
    return secrets.randbelow(upper_bound)
