r"""
.. currentmodule: evolqg.numeric

===============================================================================
General numerical tools
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    is_square_matrix
    is_symmetric_matrix
    zapsmall

===============================================================================
Numerical tools for eigenvalue problems
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    sort_eigs
    symmetric_eigenvalues
    leading_singular_pair
    quadratic_form
"""
from ._utils import is_square_matrix, is_symmetric_matrix, zapsmall
from ._eigen import sort_eigs, symmetric_eigenvalues, leading_singular_pair, quadratic_form
