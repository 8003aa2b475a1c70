r"""
.. currentmodule: evolqg.util

===============================================================================
Exceptions and warnings
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    exceptions.InputNotSymmetricError
    exceptions.InvalidInputError
    exceptions.SpectralWarning
    exceptions.NegativeDispersionWarning

===============================================================================
Type utilities
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    types.ensure_array
    types.ensure_real_matrix
"""

from . import exceptions
from . import types
