"""ID generators: workflow definitions, execution logs and table rows use CUID2."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant id (CUID2, 24 lowercase alphanumerics)."""
    return str(_cuid())
