"""I/O namespace."""

from .assembly import (  # noqa: F401
    assembly_to_system,
    load_assembly,
    save_assembly,
    system_to_assembly,
)
from .records import system_from_record  # noqa: F401
