import logging
from typing import Callable, Optional

import numpy as np

from ..base import EstimatorTransformer, Model, Transformer
from ..evolvability import evolvability as _evolvability
from ..numeric import is_symmetric_matrix, leading_singular_pair
from ..util.exceptions import InvalidInputError
from ..util.types import ensure_real_matrix

__all__ = ['SizeRemover', 'SizeModel', 'remove_size']

__author__ = 'Diogo Melo, Guilherme Garcia, Fabio Machado'

log = logging.getLogger(__name__)


def _ensure_covariance_matrix(matrix, check_sym: bool = False) -> np.ndarray:
    try:
        matrix = ensure_real_matrix(matrix)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
    if matrix.shape[0] != matrix.shape[1]:
        raise InvalidInputError(f"Covariance matrix must be square, but had shape {matrix.shape}.")
    if matrix.shape[0] < 2:
        raise InvalidInputError(f"Covariance matrix must be at least 2x2, but had shape {matrix.shape}.")
    if check_sym and not is_symmetric_matrix(matrix):
        raise InvalidInputError("covariance matrix must be symmetric.")
    return matrix


class SizeModel(Model, Transformer):
    r""" Model produced by :class:`SizeRemover`. It holds the size factor :math:`s`, i.e., the size direction
    scaled by the square root of the variance along it. Transforming a covariance matrix :math:`G` yields the
    rank-one deflation

    .. math::
        G' = G - s s^\top.

    Parameters
    ----------
    size_factor : (n, ) ndarray
        The size factor.
    isometric : bool, optional, default=False
        Whether the size direction is the isometric vector or the first principal component.
    """

    def __init__(self, size_factor: np.ndarray, isometric: bool = False):
        super().__init__()
        self._size_factor = np.asarray(size_factor)
        self._isometric = isometric

    @property
    def size_factor(self) -> np.ndarray:
        r""" The size factor :math:`s`.

        :type: (n, ) ndarray
        """
        return self._size_factor

    @property
    def isometric(self) -> bool:
        r""" Whether the removed direction is the isometric vector :math:`(1/\sqrt{n},\ldots,1/\sqrt{n})`.

        :type: bool
        """
        return self._isometric

    @property
    def size_variance(self) -> float:
        r""" The variance along the size direction, :math:`s^\top s`. This is what gets removed from a covariance
        matrix upon :meth:`transform`.

        :type: float
        """
        return float(self._size_factor @ self._size_factor)

    @property
    def dim(self) -> int:
        r""" Number of traits, i.e., the dimension of covariance matrices that can be transformed.

        :type: int
        """
        return self._size_factor.shape[0]

    def transform(self, data, **kwargs) -> np.ndarray:
        r""" Removes the size factor from a covariance matrix.

        Parameters
        ----------
        data : (n, n) array_like
            Covariance matrix with the same dimension as the one used for estimation.
        **kwargs
            Ignored kwargs for api compatibility.

        Returns
        -------
        matrix : (n, n) ndarray
            Altered covariance matrix with no variation along the size direction.
        """
        matrix = _ensure_covariance_matrix(data)
        if matrix.shape[0] != self.dim:
            raise InvalidInputError(f"Covariance matrix of shape {matrix.shape} does not match the "
                                    f"dimension {self.dim} of the size factor.")
        return matrix - np.outer(self._size_factor, self._size_factor)


class SizeRemover(EstimatorTransformer):
    r""" Removes the variation associated with size from a covariance matrix.

    Size is either the first principal component of the matrix or the isometric direction
    :math:`v = (1/\sqrt{n}, \ldots, 1/\sqrt{n})`. In both cases a size factor :math:`s = \sqrt{\sigma^2} u` is
    estimated, where :math:`u` is the unit size direction and :math:`\sigma^2` the variance along it, and the
    rank-one term :math:`s s^\top` is subtracted. For the first principal component this sets the leading
    eigenvalue to zero while leaving all other eigenpairs unchanged.

    Parameters
    ----------
    isometric : bool, optional, default=False
        If True, the isometric size vector is removed. Otherwise the first principal component.
    check_sym : bool, optional, default=False
        Check whether the input matrix is (almost) symmetric and raise an :class:`InvalidInputError` if it is not.
    evolvability : callable, optional, default=None
        Evaluates the variance of a matrix along a vector, i.e., :code:`evolvability(matrix, vector) -> float`.
        Only used for isometric size. Defaults to :meth:`evolqg.evolvability.evolvability`.

    See Also
    --------
    remove_size : Functional interface.
    SizeModel : The estimated model.

    Examples
    --------
    >>> import numpy as np
    >>> cov = np.array([[2., 1.], [1., 2.]])
    >>> model = SizeRemover().fit(cov).fetch_model()
    >>> print(np.round(model.size_variance, 6))
    3.0
    >>> np.allclose(model.transform(cov), [[.5, -.5], [-.5, .5]])
    True
    """

    def __init__(self, isometric: bool = False, check_sym: bool = False,
                 evolvability: Optional[Callable[[np.ndarray, np.ndarray], float]] = None):
        super().__init__()
        self.isometric = isometric
        self.check_sym = check_sym
        self.evolvability = evolvability

    @property
    def isometric(self) -> bool:
        r""" Whether the isometric size vector is removed instead of the first principal component.

        :type: bool
        """
        return self._isometric

    @isometric.setter
    def isometric(self, value: bool):
        self._isometric = bool(value)

    @property
    def check_sym(self) -> bool:
        r""" Whether input matrices are checked for symmetry.

        :type: bool
        """
        return self._check_sym

    @check_sym.setter
    def check_sym(self, value: bool):
        self._check_sym = bool(value)

    @property
    def evolvability(self) -> Optional[Callable[[np.ndarray, np.ndarray], float]]:
        r""" The function evaluating variance along a vector, None selects the default.

        :type: callable or None
        """
        return self._evolvability

    @evolvability.setter
    def evolvability(self, value):
        if value is not None and not callable(value):
            raise ValueError(f"evolvability must be callable or None, but was {value}.")
        self._evolvability = value

    def fit(self, data, **kwargs):
        r""" Estimates the size factor of a covariance matrix.

        Parameters
        ----------
        data : (n, n) array_like
            Covariance matrix, assumed to be symmetric positive semi-definite.
        **kwargs
            Ignored kwargs for scikit-learn compatibility.

        Returns
        -------
        self : SizeRemover
            Reference to self.
        """
        matrix = _ensure_covariance_matrix(data, check_sym=self.check_sym)
        if self.isometric:
            k = matrix.shape[0]
            size_vector = np.full(k, 1. / np.sqrt(k))
            evolvability = _evolvability if self.evolvability is None else self.evolvability
            size_variance = evolvability(matrix, size_vector)
            size_factor = size_vector * np.sqrt(size_variance)
        else:
            size_variance, size_vector = leading_singular_pair(matrix)
            size_factor = size_vector * np.sqrt(size_variance)
        log.debug("Estimated %s size factor, removing variance %g.",
                  "isometric" if self.isometric else "first principal component", size_variance)
        self._model = SizeModel(size_factor, isometric=self.isometric)
        return self

    def fetch_model(self) -> Optional[SizeModel]:
        r""" Yields the estimated size model.

        Returns
        -------
        model : SizeModel or None
            The size model or None if :meth:`fit` was not called.
        """
        return self._model


def remove_size(matrix, isometric: bool = False, check_sym: bool = False,
                evolvability: Optional[Callable[[np.ndarray, np.ndarray], float]] = None) -> np.ndarray:
    r""" Removes the effect of a size vector in a covariance matrix. See :class:`SizeRemover` for details.

    Parameters
    ----------
    matrix : (n, n) array_like
        Covariance matrix.
    isometric : bool, optional, default=False
        If True, the isometric size vector is removed. If False, the first principal component is removed.
    check_sym : bool, optional, default=False
        Raise an :class:`InvalidInputError` for non-symmetric input.
    evolvability : callable, optional, default=None
        Variance along a vector, :code:`evolvability(matrix, vector) -> float`.

    Returns
    -------
    matrix : (n, n) ndarray
        Altered covariance matrix with no variation along the former size direction.

    Examples
    --------
    >>> import numpy as np
    >>> cov = np.diag([3., 2., 1.])
    >>> np.allclose(remove_size(cov), np.diag([0., 2., 1.]))
    True
    """
    matrix = _ensure_covariance_matrix(matrix)
    return SizeRemover(isometric=isometric, check_sym=check_sym, evolvability=evolvability).fit_transform(matrix)
