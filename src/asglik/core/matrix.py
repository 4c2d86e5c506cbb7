"""
Two-state mutation model.

Types evolve along every lineage as a continuous-time Markov chain on
{0, 1} that switches state at rate u in both directions. This module
provides the rate matrix, its closed-form transition probabilities and
the stationary distribution.
"""

import numpy as np
from scipy.linalg import expm

from ..params import check_mutation_rate


def rate_matrix(mutation_rate: float) -> np.ndarray:
    """
    Rate matrix of the symmetric two-state mutation process.

    Parameters
    ----------
    mutation_rate : float
        Switching rate u (> 0)

    Returns
    -------
    Q : ndarray, shape (2, 2)
        ``[[-u, u], [u, -u]]``
    """
    u = check_mutation_rate(mutation_rate)
    return np.array([[-u, u], [u, -u]])


def transition_probabilities(mutation_rate: float, t):
    """
    Probabilities of ending in the same or the other state after time t.

    For the symmetric two-state chain these have the closed form

    .. math::
        P_{same}(t) = \\frac{1 + e^{-2ut}}{2}, \\qquad
        P_{diff}(t) = \\frac{1 - e^{-2ut}}{2},

    i.e. the probability of an even or an odd number of mutations on a
    branch of length t.

    Parameters
    ----------
    mutation_rate : float
        Switching rate u (> 0)
    t : float or ndarray
        Elapsed time(s), non-negative

    Returns
    -------
    same : float or ndarray
        Probability of an even number of mutations
    different : float or ndarray
        Probability of an odd number of mutations
    """
    exponent = -2.0 * mutation_rate * np.asarray(t, dtype=float)
    same = 0.5 * (1.0 + np.exp(exponent))
    # expm1 keeps precision on short branches
    different = -0.5 * np.expm1(exponent)
    if np.ndim(same) == 0:
        return float(same), float(different)
    return same, different


def transition_matrix(mutation_rate: float, t: float) -> np.ndarray:
    """
    Compute P(t) = exp(Qt) numerically.

    Uses scipy's matrix exponential. Cross-checks
    :func:`transition_probabilities`.

    Parameters
    ----------
    mutation_rate : float
        Switching rate u (> 0)
    t : float
        Elapsed time

    Returns
    -------
    P : ndarray, shape (2, 2)
        ``P[i, j]`` is the probability of moving from type i to type j
    """
    return expm(rate_matrix(mutation_rate) * t)


def stationary_distribution(Q: np.ndarray) -> np.ndarray:
    """
    Stationary distribution of a rate matrix.

    Solves pi @ Q = 0 with pi summing to 1 by taking the eigenvector of
    Q^T whose eigenvalue is closest to zero.

    Parameters
    ----------
    Q : ndarray, shape (n, n)
        Rate matrix (rows sum to zero)

    Returns
    -------
    pi : ndarray, shape (n,)
        Stationary distribution

    Examples
    --------
    >>> stationary_distribution(rate_matrix(0.3))
    array([0.5, 0.5])
    """
    eigenvalues, eigenvectors = np.linalg.eig(Q.T)
    pi = np.real(eigenvectors[:, np.argmin(np.abs(eigenvalues))])
    return pi / pi.sum()
