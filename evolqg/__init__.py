r"""
evolqg
======

Integration and size utilities for covariance and correlation matrices in quantitative genetics and
morphometrics.

.. autosummary::
    :toctree: generated/
    :template: class_nomodule.rst

    size.remove_size
    size.SizeRemover
    integration.eigenvalue_dispersion
    integration.EigenvalueDispersion
    evolvability.evolvability
"""
import logging

from ._version import __version__

from . import util
from . import numeric
from . import evolvability
from . import size
from . import integration

from .size import remove_size, SizeRemover, SizeModel
from .integration import eigenvalue_dispersion, EigenvalueDispersion, EigenvalueDispersionModel
from .util.exceptions import InputNotSymmetricError, InvalidInputError

# set up null handler
logging.getLogger(__name__).addHandler(logging.NullHandler())
