from typing import Tuple

import numpy as _np
import scipy.linalg


def sort_eigs(evals, evecs=None):
    r""" Sorts eigenvalues (and optionally eigenvectors) in descending order. Ties keep their original order.

    Parameters
    ----------
    evals: (n, ) ndarray
        eigenvalues
    evecs: (k, n) ndarray, optional, default=None
        eigenvectors in a column matrix

    Returns
    -------
    evals or (evals, evecs) : (n, ) ndarray or ((n, ) ndarray, (k, n) ndarray)
        the sorted eigenvalues and, if provided, eigenvectors
    """
    order = _np.argsort(-evals, kind='stable')
    if evecs is None:
        return evals[order]
    return evals[order], evecs[:, order]


def symmetric_eigenvalues(matrix: _np.ndarray) -> _np.ndarray:
    r""" Computes the eigenvalues of a real symmetric matrix. Only the lower triangle of the matrix is referenced.

    Parameters
    ----------
    matrix : (n, n) ndarray
        Symmetric matrix.

    Returns
    -------
    eigenvalues : (n, ) ndarray
        Real eigenvalues in descending order.
    """
    evals = scipy.linalg.eigh(matrix, lower=True, eigvals_only=True)
    return sort_eigs(evals)


def leading_singular_pair(matrix: _np.ndarray) -> Tuple[float, _np.ndarray]:
    r""" Computes the largest singular value :math:`d_1` of a matrix and the associated left singular vector
    :math:`u_1`. For symmetric positive semi-definite matrices these are the leading eigenvalue and a unit
    eigenvector, the sign of which is arbitrary.

    Parameters
    ----------
    matrix : (n, m) ndarray
        Input matrix.

    Returns
    -------
    (d1, u1) : (float, (n, ) ndarray)
        The leading singular value and left singular vector.
    """
    U, s, _ = scipy.linalg.svd(matrix)
    idx = int(_np.argmax(s))
    return float(s[idx]), U[:, idx]


def quadratic_form(matrix: _np.ndarray, vectors: _np.ndarray) -> _np.ndarray:
    r""" Evaluates :math:`b_k^\top A b_k` for every column :math:`b_k` of `vectors`, i.e., the diagonal of
    :math:`B^\top A B`, without forming the full product.

    Parameters
    ----------
    matrix : (n, n) ndarray
        The matrix :math:`A`.
    vectors : (n, k) ndarray
        Column matrix :math:`B`.

    Returns
    -------
    values : (k, ) ndarray
        The quadratic forms.
    """
    return _np.einsum('ik,ij,jk->k', vectors, matrix, vectors)
