from typing import Union

import numpy as np

from ..numeric import quadratic_form
from ..util.exceptions import InvalidInputError
from ..util.types import ensure_real_matrix, ensure_number_array

__all__ = ['evolvability']


def evolvability(matrix, beta) -> Union[float, np.ndarray]:
    r""" Evolvability of a covariance matrix :math:`G` along one or several directions of selection
    :math:`\beta`, i.e., the variance projected onto the direction

    .. math::
        e(\beta) = \beta^\top G \beta.

    For unit vectors :math:`\beta` this is the amount of variation available to respond to selection
    along :math:`\beta`.

    Parameters
    ----------
    matrix : (n, n) array_like
        Covariance matrix :math:`G`.
    beta : (n, ) or (n, k) array_like
        A single direction or a column matrix of `k` directions. The directions are used as given,
        they are not normalized.

    Returns
    -------
    evolvability : float or (k, ) ndarray
        The evolvability, a scalar if `beta` was one-dimensional, otherwise one value per column.

    Raises
    ------
    InvalidInputError
        If `matrix` is not square or the length of the directions does not match its dimension.

    Examples
    --------
    >>> import numpy as np
    >>> evolvability(np.diag([2., 1.]), np.array([1., 0.]))
    2.0
    """
    matrix = ensure_real_matrix(matrix)
    beta = ensure_number_array(beta)
    if matrix.shape[0] != matrix.shape[1]:
        raise InvalidInputError(f"Covariance matrix must be square, but had shape {matrix.shape}.")
    single = beta.ndim == 1
    if single:
        beta = beta[:, None]
    if beta.ndim != 2 or beta.shape[0] != matrix.shape[0]:
        raise InvalidInputError(f"Directions of shape {beta.shape} are incompatible with "
                                f"a {matrix.shape[0]}x{matrix.shape[1]} matrix.")
    values = quadratic_form(matrix, beta)
    return float(values[0]) if single else values
