import numpy as _np


def is_square_matrix(arr: _np.ndarray) -> bool:
    r""" Determines whether an array is a square matrix. This means that ndim must be 2 and shape[0] must be equal
    to shape[1].

    Parameters
    ----------
    arr : ndarray
        The array to check.

    Returns
    -------
    is_square_matrix : bool
        Whether the array is a square matrix.
    """
    return isinstance(arr, _np.ndarray) and arr.ndim == 2 and arr.shape[0] == arr.shape[1]


def is_symmetric_matrix(matrix: _np.ndarray, tol: float = 100 * _np.finfo(_np.float64).eps) -> bool:
    r""" Checks whether a matrix is symmetric up to a tolerance. The deviation between the matrix :math:`A` and its
    transpose is measured as mean relative difference over the set :math:`D = \{(i, j) : A_{ij} \neq A_{ji}\}` of
    entries that differ,

    .. math::
        \delta = \frac{\sum_{(i,j)\in D} |A_{ij} - A_{ji}|}{\sum_{(i,j)\in D} |A_{ij}|},

    which falls back to the mean absolute difference if the mean magnitude of these entries does not exceed `tol`.
    The matrix is deemed symmetric if :math:`\delta\leq \mathrm{tol}`.

    Parameters
    ----------
    matrix : ndarray
        The matrix for which this check is performed.
    tol : float, optional, default=100 * machine epsilon
        The tolerance.

    Returns
    -------
    is_symmetric : bool
        True if the matrix is square and symmetric, otherwise False.
    """
    if not is_square_matrix(matrix):
        return False
    differs = matrix != matrix.T
    if not _np.any(differs):
        return True
    diff = _np.mean(_np.abs(matrix - matrix.T)[differs])
    scale = _np.mean(_np.abs(matrix)[differs])
    if _np.isfinite(scale) and scale > tol:
        diff = diff / scale
    return bool(diff <= tol)


def zapsmall(x: _np.ndarray, digits: int = 7) -> _np.ndarray:
    r""" Rounds values that are negligible in comparison to the largest absolute value to zero. All values
    are rounded to :math:`\max(0, d - \lceil\log_{10}(\max_i |x_i|)\rceil)` decimals, where :math:`d` is `digits`.

    Parameters
    ----------
    x : ndarray
        Input values.
    digits : int, default=7
        The number of significant digits, relative to the largest magnitude, that are kept.

    Returns
    -------
    zapped : ndarray
        Rounded copy of the input.

    Examples
    --------
    >>> import numpy as np
    >>> zapsmall(np.array([1., 1e-20, -3e-17]))
    array([1., 0., 0.])
    """
    x = _np.asarray(x, dtype=float)
    finite = x[_np.isfinite(x)]
    mx = _np.max(_np.abs(finite)) if finite.size > 0 else 0.
    decimals = max(0, digits - int(_np.ceil(_np.log10(mx)))) if mx > 0 else digits
    # round() keeps negative zeros, adding 0. normalizes them
    return _np.round(x, decimals) + 0.
