"""
Sum-Check Toolkit
=================

The sum-check interactive proof over prime fields, with the exact Lagrange
and multilinear-extension machinery it is built from.

Modules:
    - common: Field arithmetic, sparse polynomials, challenge sources, errors
    - lagrange: Univariate and multilinear Lagrange interpolation
    - protocol: Round reducer, prover, verifier and session driver
    - config: Session configuration
    - demo: Command-line walkthrough (`sumcheck-demo`)

Quick Start:
    >>> from sumcheck_toolkit.common import PrimeField, SparsePolynomial
    >>> from sumcheck_toolkit.protocol import run_protocol
    >>> field = PrimeField(71)
    >>> g = SparsePolynomial.from_terms(field, 3, [
    ...     (2, [(0, 3)]), (1, [(0, 1), (2, 1)]), (1, [(1, 1), (2, 1)])])
    >>> run_protocol(g).accepted
    True
"""

__version__ = "0.1.0"

from . import common
from . import lagrange
from . import protocol
from .config import ProtocolConfig
