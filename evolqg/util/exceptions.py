"""
Exceptions and warnings raised by evolqg.
"""


class SpectralWarning(RuntimeWarning):
    pass


class NegativeDispersionWarning(SpectralWarning):
    r"""
    The sample-size corrected eigenvalue dispersion is negative, so its square root is undefined and the
    resulting integration index is NaN. This happens when the observed dispersion is smaller than what is
    expected from sampling error alone.
    """


class InputNotSymmetricError(ValueError):
    r""" The input matrix is not symmetric. """

    def __init__(self, msg="covariance matrix must be symmetric."):
        super().__init__(msg)


class InvalidInputError(ValueError):
    r"""
    The input matrix cannot be processed, e.g., because it is not a square matrix or its dimensions do not
    match the ones of a previously estimated model.
    """
