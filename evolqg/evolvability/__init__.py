r"""
.. currentmodule: evolqg.evolvability

===============================================================================
Projected variance
===============================================================================

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    evolvability
"""

from ._evolvability import evolvability
