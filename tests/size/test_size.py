import numpy as np
import pytest
from numpy.testing import assert_, assert_equal, assert_almost_equal, assert_array_almost_equal, \
    assert_array_equal, assert_raises

from evolqg.evolvability import evolvability
from evolqg.size import SizeRemover, SizeModel, remove_size
from evolqg.util.exceptions import InvalidInputError


@pytest.fixture
def spectrum():
    return np.array([10., 4., 3., 2., 1.5, 1.])


@pytest.fixture
def cov_matrix(matrix_with_spectrum, spectrum):
    return matrix_with_spectrum(spectrum)


def test_first_principal_component_removed(cov_matrix, spectrum):
    result = remove_size(cov_matrix)
    assert_equal(result.shape, cov_matrix.shape)
    evals = np.sort(np.linalg.eigvalsh(result))[::-1]
    assert_array_almost_equal(evals, np.concatenate([spectrum[1:], [0.]]))
    assert_equal(np.linalg.matrix_rank(result, tol=1e-8), len(spectrum) - 1)


def test_orthogonal_structure_unchanged(cov_matrix):
    evals, evecs = np.linalg.eigh(cov_matrix)
    result = remove_size(cov_matrix)
    # all but the leading eigenpair are preserved
    for i in range(len(evals) - 1):
        assert_array_almost_equal(result @ evecs[:, i], evals[i] * evecs[:, i])
    assert_array_almost_equal(result @ evecs[:, -1], np.zeros(len(evals)))


def test_isometric_size_removed(cov_matrix):
    n = cov_matrix.shape[0]
    v = np.full(n, 1. / np.sqrt(n))
    result = remove_size(cov_matrix, isometric=True)
    assert_almost_equal(evolvability(result, v), 0.)
    assert_almost_equal(np.trace(cov_matrix) - np.trace(result), evolvability(cov_matrix, v))
    assert_array_almost_equal(result, result.T)


def test_isometric_matrix_with_isometric_pc():
    # compound symmetry: the isometric vector is the first principal component
    cov = np.full((4, 4), .5) + .5 * np.eye(4)
    assert_array_almost_equal(remove_size(cov), remove_size(cov, isometric=True))
    assert_array_almost_equal(remove_size(cov), .5 * (np.eye(4) - np.full((4, 4), .25)))


@pytest.mark.parametrize('isometric', [False, True], ids=lambda x: f"isometric={x}")
def test_estimator_equals_function(cov_matrix, isometric):
    est = SizeRemover(isometric=isometric)
    assert_array_equal(est.fit_transform(cov_matrix), remove_size(cov_matrix, isometric=isometric))
    model = est.fetch_model()
    assert_(isinstance(model, SizeModel))
    assert_equal(model.isometric, isometric)
    assert_equal(model.dim, cov_matrix.shape[0])
    assert_almost_equal(model.size_variance, np.trace(cov_matrix) - np.trace(model.transform(cov_matrix)))


def test_size_variance_is_leading_eigenvalue(cov_matrix, spectrum):
    model = SizeRemover().fit(cov_matrix).fetch_model()
    assert_almost_equal(model.size_variance, spectrum[0])
    assert_almost_equal(np.linalg.norm(model.size_factor), np.sqrt(spectrum[0]))


def test_transform_other_matrix(cov_matrix, matrix_with_spectrum):
    model = SizeRemover().fit(cov_matrix).fetch_model()
    other = matrix_with_spectrum([3., 3., 2., 2., 1., 1.], seed=5)
    s = model.size_factor
    assert_array_almost_equal(model.transform(other), other - np.outer(s, s))
    assert_array_almost_equal(model(other), model.transform(other))

    with assert_raises(InvalidInputError):
        model.transform(np.eye(3))


def test_injected_evolvability(cov_matrix):
    calls = []

    def constant_variance(matrix, vector):
        calls.append(vector)
        return 6.

    result = remove_size(cov_matrix, isometric=True, evolvability=constant_variance)
    assert_equal(len(calls), 1)
    n = cov_matrix.shape[0]
    assert_array_almost_equal(calls[0], np.full(n, 1. / np.sqrt(n)))
    assert_array_almost_equal(result, cov_matrix - np.full((n, n), 1.))

    # only the isometric variant queries the variance along a vector
    remove_size(cov_matrix, isometric=False, evolvability=constant_variance)
    assert_equal(len(calls), 1)


def test_invalid_evolvability():
    with assert_raises(ValueError):
        SizeRemover(evolvability=5)


@pytest.mark.parametrize('matrix', [np.ones((3, 2)), np.ones(3), np.ones((1, 1)), np.ones((2, 2, 2))],
                         ids=['non-square', '1d', '1x1', '3d'])
def test_invalid_shapes(matrix):
    with assert_raises(InvalidInputError):
        remove_size(matrix)


def test_symmetry_check():
    non_symmetric = np.array([[2., 1.], [0., 2.]])
    with assert_raises(InvalidInputError):
        remove_size(non_symmetric, check_sym=True)
    # without the check, the input is processed as is
    assert_equal(remove_size(non_symmetric).shape, (2, 2))


def test_integer_input():
    result = remove_size([[4, 0], [0, 1]])
    assert_(np.issubdtype(result.dtype, np.floating))
    assert_array_almost_equal(result, [[0., 0.], [0., 1.]])


class _ArrayLike:

    def __init__(self, data):
        self._data = np.asarray(data)

    def __array__(self, dtype=None, copy=None):
        return self._data if dtype is None else self._data.astype(dtype)


@pytest.mark.parametrize('isometric', [False, True], ids=lambda x: f"isometric={x}")
def test_array_like_input(cov_matrix, isometric):
    expected = remove_size(cov_matrix, isometric=isometric)
    assert_array_almost_equal(remove_size(_ArrayLike(cov_matrix), isometric=isometric), expected)


@pytest.mark.parametrize('isometric', [False, True], ids=lambda x: f"isometric={x}")
def test_data_frame_input(cov_matrix, isometric):
    pd = pytest.importorskip("pandas")
    frame = pd.DataFrame(cov_matrix)
    result = remove_size(frame, isometric=isometric, check_sym=True)
    assert_(isinstance(result, np.ndarray))
    assert_array_almost_equal(result, remove_size(cov_matrix, isometric=isometric))
