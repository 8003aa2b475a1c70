import logging
import numbers
import warnings
from typing import Optional

import numpy as np

from ..base import Estimator, Model
from ..numeric import is_symmetric_matrix, symmetric_eigenvalues, zapsmall
from ..util.exceptions import InputNotSymmetricError, NegativeDispersionWarning
from ..util.types import ensure_real_matrix

__all__ = ['EigenvalueDispersion', 'EigenvalueDispersionModel', 'eigenvalue_dispersion']

__author__ = 'Fabio Andrade Machado, Diogo Melo'

log = logging.getLogger(__name__)


class EigenvalueDispersionModel(Model):
    r""" The result of an :class:`EigenvalueDispersion` estimation.

    Parameters
    ----------
    eigenvalues : (k, ) ndarray
        The eigenvalues that entered the computation, in descending order.
    observed : float
        Observed eigenvalue dispersion, corrected for sampling error and expressed as standard deviation
        if this was requested.
    maximum : float
        Theoretical maximum of the dispersion for a matrix of the same size and trace, treated the same
        way as `observed`.
    use_std_dev : bool, optional, default=False
        Whether dispersion is expressed as standard deviation instead of variance.
    relative : bool, optional, default=True
        Whether :attr:`value` is scaled by the theoretical maximum.
    sample_size : int, optional, default=None
        Sample size used for the correction, if any.
    """

    def __init__(self, eigenvalues: np.ndarray, observed: float, maximum: float, use_std_dev: bool = False,
                 relative: bool = True, sample_size: Optional[int] = None):
        super().__init__()
        self._eigenvalues = eigenvalues
        self._observed = observed
        self._maximum = maximum
        self._use_std_dev = use_std_dev
        self._relative = relative
        self._sample_size = sample_size

    @property
    def eigenvalues(self) -> np.ndarray:
        r""" Eigenvalues that entered the computation.

        :type: (k, ) ndarray
        """
        return self._eigenvalues

    @property
    def n_eigenvalues(self) -> int:
        r""" Number of eigenvalues that entered the computation.

        :type: int
        """
        return self._eigenvalues.shape[0]

    @property
    def observed(self) -> float:
        r""" Observed (absolute) eigenvalue dispersion.

        :type: float
        """
        return self._observed

    @property
    def maximum(self) -> float:
        r""" Theoretical maximum of the eigenvalue dispersion.

        :type: float
        """
        return self._maximum

    @property
    def use_std_dev(self) -> bool:
        r""" Whether dispersion is measured as standard deviation.

        :type: bool
        """
        return self._use_std_dev

    @property
    def relative(self) -> bool:
        r""" Whether :attr:`value` is relative to the theoretical maximum.

        :type: bool
        """
        return self._relative

    @property
    def sample_size(self) -> Optional[int]:
        r""" The sample size the dispersion was corrected for, None if uncorrected.

        :type: int or None
        """
        return self._sample_size

    @property
    def value(self) -> float:
        r""" The integration index. If :attr:`relative`, the ratio :attr:`observed` / :attr:`maximum`, otherwise
        :attr:`observed`. NaN if undefined.

        :type: float
        """
        if not self.relative:
            return float(self.observed)
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.observed) / np.float64(self.maximum))


class EigenvalueDispersion(Estimator):
    r""" Integration index based on the dispersion of the eigenvalues of a covariance or correlation matrix.

    For :math:`n` eigenvalues :math:`\lambda_i` with mean :math:`\bar\lambda` the observed dispersion is the
    eigenvalue variance

    .. math::
        V = \frac{1}{n}\sum_{i=1}^n (\lambda_i - \bar\lambda)^2,

    and its maximum for a matrix of the same size and trace, attained if all variation is concentrated in one
    eigenvalue, is

    .. math::
        V_\mathrm{max} = \frac{(n - 1)\left(\sum_i \lambda_i\right)^2}{n^2}.

    By default the relative eigenvalue variance :math:`V / V_\mathrm{max}` [1]_ is
    computed. The dispersion can also be measured as standard deviation [2]_.
    If a sample size :math:`N` is provided, the expected dispersion of a matrix with no integration estimated
    from :math:`N` observations, :math:`V_\mathrm{max} / N`, is subtracted from :math:`V` and added to
    :math:`V_\mathrm{max}` [3]_. The result then is a deviation from the expectation
    that does not depend on sample size; it can be negative, in which case its square root is NaN.

    Parameters
    ----------
    use_std_dev : bool, optional, default=False
        Measure dispersion as standard deviation instead of variance of eigenvalues.
    relative : bool, optional, default=True
        Scale the dispersion by its theoretical maximum.
    sample_size : int, optional, default=None
        Number of observations the matrix was estimated from. If given, the dispersion is corrected for sampling
        error.
    keep_positive : bool, optional, default=True
        Only keep eigenvalues which are positive after rounding values that are negligible compared to the
        largest eigenvalue to zero (see :meth:`evolqg.numeric.zapsmall`).
    zap_digits : int, optional, default=7
        Number of significant digits, relative to the largest eigenvalue, used when deciding which eigenvalues
        are positive.

    See Also
    --------
    eigenvalue_dispersion : Functional interface.
    EigenvalueDispersionModel : The estimated model.

    References
    ----------
    .. [1] Machado, F. A., Hubbe, A., Melo, D., Porto, A. and Marroig, G. (2019). Measuring the magnitude of
       morphological integration: The effect of differences in morphometric representations and the inclusion
       of size. Evolution 73(12), 2518-2528.
    .. [2] Pavlicev, M., Cheverud, J. M. and Wagner, G. P. (2009). Measuring morphological integration using
       eigenvalue variance. Evolutionary Biology 36(1), 157-170.
    .. [3] Wagner, G. P. (1984). On the eigenvalue distribution of genetic and phenotypic dispersion matrices:
       evidence for a nonrandom organization of quantitative character variation. Journal of Mathematical
       Biology 21(1), 77-95.

    Examples
    --------
    >>> import numpy as np
    >>> model = EigenvalueDispersion(relative=False).fit(np.diag([3., 1.])).fetch_model()
    >>> round(model.value, 6), round(model.maximum, 6)
    (1.0, 4.0)
    """

    def __init__(self, use_std_dev: bool = False, relative: bool = True, sample_size: Optional[int] = None,
                 keep_positive: bool = True, zap_digits: int = 7):
        super().__init__()
        self.use_std_dev = use_std_dev
        self.relative = relative
        self.sample_size = sample_size
        self.keep_positive = keep_positive
        self.zap_digits = zap_digits

    @property
    def use_std_dev(self) -> bool:
        r""" Whether dispersion is measured as standard deviation of eigenvalues.

        :type: bool
        """
        return self._use_std_dev

    @use_std_dev.setter
    def use_std_dev(self, value: bool):
        self._use_std_dev = bool(value)

    @property
    def relative(self) -> bool:
        r""" Whether the dispersion is scaled by its theoretical maximum.

        :type: bool
        """
        return self._relative

    @relative.setter
    def relative(self, value: bool):
        self._relative = bool(value)

    @property
    def sample_size(self) -> Optional[int]:
        r""" The number of observations that the matrix was estimated from.

        :getter: Yields the sample size or None.
        :setter: Sets a new sample size, must be None or a positive integer.
        :type: int or None
        """
        return self._sample_size

    @sample_size.setter
    def sample_size(self, value: Optional[int]):
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                raise ValueError(f"sample_size must be None or a positive integer, but was {value}.")
            value = int(value)
        self._sample_size = value

    @property
    def keep_positive(self) -> bool:
        r""" Whether non-positive eigenvalues are removed before computing the dispersion.

        :type: bool
        """
        return self._keep_positive

    @keep_positive.setter
    def keep_positive(self, value: bool):
        self._keep_positive = bool(value)

    @property
    def zap_digits(self) -> int:
        r""" Significant digits relative to the largest eigenvalue which decide about positivity.

        :type: int
        """
        return self._zap_digits

    @zap_digits.setter
    def zap_digits(self, value: int):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
            raise ValueError(f"zap_digits must be a non-negative integer, but was {value}.")
        self._zap_digits = int(value)

    def fit(self, data, **kwargs):
        r""" Computes the eigenvalue dispersion of a matrix.

        Parameters
        ----------
        data : (n, n) array_like
            Covariance or correlation matrix.
        **kwargs
            Ignored kwargs for scikit-learn compatibility.

        Returns
        -------
        self : EigenvalueDispersion
            Reference to self.

        Raises
        ------
        InputNotSymmetricError
            If the matrix is not symmetric.
        """
        matrix = ensure_real_matrix(data)
        if not is_symmetric_matrix(matrix):
            raise InputNotSymmetricError()

        eigenvalues = symmetric_eigenvalues(matrix)
        if self.keep_positive:
            positive = zapsmall(eigenvalues, digits=self.zap_digits) > 0
            if not np.all(positive):
                log.debug("Discarding %d non-positive of %d eigenvalues.", np.count_nonzero(~positive),
                          len(eigenvalues))
            eigenvalues = eigenvalues[positive]

        n = len(eigenvalues)
        if n == 0:
            log.debug("No eigenvalues left, eigenvalue dispersion is undefined.")
            observed = maximum = np.nan
        else:
            observed = np.sum((eigenvalues - np.mean(eigenvalues)) ** 2) / n
            maximum = (n - 1) * np.sum(eigenvalues) ** 2 / n ** 2

        if self.sample_size is not None:
            log.debug("Correcting eigenvalue dispersion for sample size %d.", self.sample_size)
            expected = maximum / self.sample_size
            observed = observed - expected
            maximum = maximum + expected

        if self.use_std_dev:
            if observed < 0:
                warnings.warn(f"Corrected eigenvalue variance is negative ({observed:g}), the eigenvalue "
                              f"standard deviation is undefined.", NegativeDispersionWarning)
            with np.errstate(invalid='ignore'):
                observed = np.sqrt(observed)
                maximum = np.sqrt(maximum)

        self._model = EigenvalueDispersionModel(eigenvalues, float(observed), float(maximum),
                                                use_std_dev=self.use_std_dev, relative=self.relative,
                                                sample_size=self.sample_size)
        return self

    def fetch_model(self) -> Optional[EigenvalueDispersionModel]:
        r""" Yields the latest estimated model.

        Returns
        -------
        model : EigenvalueDispersionModel or None
            The model or None if :meth:`fit` was not called.
        """
        return self._model


def eigenvalue_dispersion(matrix, use_std_dev: bool = False, relative: bool = True,
                          sample_size: Optional[int] = None, keep_positive: bool = True) -> float:
    r""" Integration index based on eigenvalue dispersion of a covariance or correlation matrix.
    See :class:`EigenvalueDispersion` for details.

    Parameters
    ----------
    matrix : (n, n) array_like
        Covariance or correlation matrix.
    use_std_dev : bool, optional, default=False
        If True, the standard deviation of eigenvalues is estimated, otherwise their variance.
    relative : bool, optional, default=True
        If True, the dispersion is scaled by its theoretical maximum.
    sample_size : int, optional, default=None
        If given, the dispersion is corrected for the expected dispersion of an unintegrated matrix
        estimated from this many observations.
    keep_positive : bool, optional, default=True
        If True, non-positive eigenvalues are removed from the calculation.

    Returns
    -------
    index : float
        Integration index based on eigenvalue dispersion.

    Raises
    ------
    InputNotSymmetricError
        If the matrix is not symmetric.

    Examples
    --------
    Relative eigenvalue variance of a matrix with eigenvalues (3, 1, 0):

    >>> import numpy as np
    >>> print(round(eigenvalue_dispersion(np.diag([3., 1., 0.]), keep_positive=False), 6))
    0.4375
    """
    estimator = EigenvalueDispersion(use_std_dev=use_std_dev, relative=relative, sample_size=sample_size,
                                     keep_positive=keep_positive)
    return estimator.fit(ensure_real_matrix(matrix)).fetch_model().value
