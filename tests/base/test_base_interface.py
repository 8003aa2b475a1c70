import copy
import pickle

import numpy as np
from numpy.testing import assert_raises, assert_, assert_equal, assert_array_equal

from evolqg.base import Transformer, Model
from evolqg.integration import EigenvalueDispersion
from evolqg.size import SizeRemover


def test_transformer_interface():
    with assert_raises(TypeError):
        _ = Transformer()


class MockModelVarargs(Model):

    def __init__(self, *args):
        ...


class A(Model):

    def __init__(self, a):
        self.a = a


class MockModel(Model):

    def __init__(self, p1, p2, p3, p4=55, a=A(33), **kw):
        self.p1 = p1
        self.p2 = p2
        self.p3 = p3
        self.p4 = p4
        self.a = a
        self.kw = kw


def test_mock_model():
    with assert_raises(RuntimeError):
        MockModelVarargs().get_params()
    m = MockModel(1., 2., 3.)
    params = m.get_params()
    for i, val in zip([1, 2, 3, 4], [1., 2., 3., 55]):
        assert_(f'p{i}' in params)
        assert_equal(params[f'p{i}'], val)
    assert_equal(params['a'].a, 33)

    m.set_params()  # no-op
    m.set_params(**params)
    m.set_params(a__a=55)
    assert_equal(m.a.a, 55)

    with assert_raises(ValueError):
        m.set_params(nope=33)

    m_copy = m.copy()
    assert_(m_copy is not m)
    assert_(m_copy.a is not m.a)
    assert_equal(m_copy.a.a, 55)


def test_estimator_params():
    est = EigenvalueDispersion(use_std_dev=True, sample_size=20)
    params = est.get_params()
    assert_equal(params, dict(use_std_dev=True, relative=True, sample_size=20, keep_positive=True, zap_digits=7))

    est.set_params(relative=False, sample_size=None)
    assert_(not est.relative)
    assert_(est.sample_size is None)

    with assert_raises(ValueError):
        est.set_params(sample_size=-3)
    with assert_raises(ValueError):
        est.set_params(unknown=1)

    assert_('EigenvalueDispersion' in repr(est))


def test_estimator_repr():
    est = EigenvalueDispersion(sample_size=20)
    assert_equal(repr(est), "EigenvalueDispersion(sample_size=20)")
    assert_equal(repr(EigenvalueDispersion()), "EigenvalueDispersion()")
    assert_equal(repr(SizeRemover(isometric=True)), "SizeRemover(isometric=True)")

    est.set_params(relative=False)
    assert_('relative=False' in repr(est))
    assert_('zap_digits' not in repr(est))


def test_estimator_without_model():
    est = SizeRemover()
    assert_(not est.has_model)
    assert_(est.fetch_model() is None)
    with assert_raises(ValueError):
        est.transform(np.eye(3))


def test_fit_fetch():
    model = SizeRemover().fit_fetch(np.diag([4., 1.]))
    assert_(model is not None)
    assert_equal(model.dim, 2)


def test_pickle_roundtrip():
    est = EigenvalueDispersion(sample_size=10).fit(np.diag([5., 4., 3.]))
    est_pickle = pickle.dumps(est)
    assert_(b"version" in est_pickle)

    from numpy.testing import assert_no_warnings
    est_restored = assert_no_warnings(pickle.loads, est_pickle)
    assert_equal(est_restored.sample_size, 10)
    assert_equal(est_restored.fetch_model().value, est.fetch_model().value)
    assert_array_equal(est_restored.fetch_model().eigenvalues, est.fetch_model().eigenvalues)


def test_deepcopy_model():
    model = SizeRemover().fit(np.diag([4., 1.])).fetch_model()
    model_copy = copy.deepcopy(model)
    assert_array_equal(model.size_factor, model_copy.size_factor)
    assert_(model.size_factor is not model_copy.size_factor)
