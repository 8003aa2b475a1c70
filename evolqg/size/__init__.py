r"""
.. currentmodule: evolqg.size

===============================================================================
Estimators
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    SizeRemover

===============================================================================
Models
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    SizeModel

===============================================================================
Functions
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    remove_size
"""

from ._size import SizeRemover, SizeModel, remove_size
