"""
Lagrange Interpolation Engine

Exact interpolation over the two domains sum-check cares about:

    - UnivariateLagrangeBasis / UnivariateInterpolation: the linear domain
      {0, ..., n-1}, used to evaluate round polynomials sent as evaluations
    - EqualityBasis / MultilinearExtension: the boolean hypercube {0,1}^v,
      used to turn a table of values into the polynomial sum-check runs on

Usage:
    >>> from sumcheck_toolkit.common import PrimeField
    >>> from sumcheck_toolkit.lagrange import MultilinearExtension
    >>>
    >>> field = PrimeField(71)
    >>> mle = MultilinearExtension.from_evaluations(field, [3, 7, 2, 5])
    >>> mle.interpolate([1, 0]).value
    2
"""

from .univariate import (
    UnivariateLagrangeBasis,
    UnivariateInterpolation,
    evaluate_from_evaluations,
)
from .multilinear import EqualityBasis, MultilinearExtension

__all__ = [
    "UnivariateLagrangeBasis",
    "UnivariateInterpolation",
    "evaluate_from_evaluations",
    "EqualityBasis",
    "MultilinearExtension",
]
