"""Math utilities namespace."""

from .tensor import (  # noqa: F401
    ArrayF,
    as_tensor3,
    as_vector3,
    check_inertia,
    parallel_axis_shift,
    point_inertia,
    tensor_from_rows,
)
