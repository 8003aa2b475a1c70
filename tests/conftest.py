# pytest specific configuration file containing eg fixtures.
import os
import random

import numpy as np
import pytest
from scipy.stats import ortho_group


@pytest.fixture
def fixed_seed():
    random.seed(42)
    np.random.mtrand.seed(42)
    yield
    new_seed = int.from_bytes(os.urandom(16), 'big') % (2 ** 32 - 1)
    random.seed(new_seed)
    np.random.mtrand.seed(new_seed)


@pytest.fixture
def matrix_with_spectrum():
    r""" Factory for symmetric matrices :math:`Q \mathrm{diag}(\lambda) Q^\top` with a random orthogonal :math:`Q`
    and prescribed eigenvalues. """

    def factory(eigenvalues, seed=17):
        eigenvalues = np.asarray(eigenvalues, dtype=float)
        q = ortho_group.rvs(dim=len(eigenvalues), random_state=seed)
        matrix = q @ np.diag(eigenvalues) @ q.T
        return .5 * (matrix + matrix.T)

    return factory
