from typing import Optional

import numpy as np


def ensure_array(arr, ndim: Optional[int] = None, dtype=None) -> np.ndarray:
    if not isinstance(arr, np.ndarray):
        arr = np.asanyarray(arr)
    if ndim is not None and arr.ndim != ndim:
        raise ValueError(f"ndim of provided array was {arr.ndim} != {ndim}")
    if dtype is not None and not np.issubdtype(arr.dtype, dtype):
        raise ValueError(f"Array got incompatible dtype: {arr.dtype} is not a subtype of {dtype}.")
    return arr


def ensure_number_array(arr, ndim: Optional[int] = None) -> np.ndarray:
    return ensure_array(arr, ndim=ndim, dtype=np.number)


def ensure_real_matrix(matrix) -> np.ndarray:
    r""" Converts the input to a two-dimensional floating point ndarray. Integer and boolean input is upcast,
    complex input is rejected.

    Parameters
    ----------
    matrix : array_like
        The matrix, e.g., a nested list or an ndarray.

    Returns
    -------
    matrix : ndarray
        The matrix as floating point array. If the input already was a floating point array, it is returned as-is.

    Raises
    ------
    ValueError
        If the input is not two-dimensional or not real-valued.
    """
    matrix = ensure_array(matrix, ndim=2)
    if np.issubdtype(matrix.dtype, np.bool_) or np.issubdtype(matrix.dtype, np.integer):
        matrix = matrix.astype(np.float64)
    if not np.issubdtype(matrix.dtype, np.floating):
        raise ValueError(f"Matrix must be real-valued, but had dtype {matrix.dtype}.")
    return matrix
