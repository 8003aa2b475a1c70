r"""
.. currentmodule: evolqg.integration

===============================================================================
Estimators
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    EigenvalueDispersion

===============================================================================
Models
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    EigenvalueDispersionModel

===============================================================================
Functions
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    eigenvalue_dispersion
"""

from ._eigenvalue_dispersion import EigenvalueDispersion, EigenvalueDispersionModel, eigenvalue_dispersion
