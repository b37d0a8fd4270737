"""
Common building blocks for the sum-check toolkit.

This module provides:
    - Finite field arithmetic (PrimeField, FieldElement, BatchInverter)
    - Sparse multivariate polynomials (SparsePolynomial, boolean_hypercube)
    - Injected challenge sources (SeededRandomSource, SystemRandomSource)
    - The toolkit's error hierarchy
"""

from .field import PrimeField, FieldElement, BatchInverter
from .polynomial import SparsePolynomial, Term, boolean_hypercube, hypercube_point
from .randomness import (
    RandomSource,
    SeededRandomSource,
    SystemRandomSource,
    ScriptedRandomSource,
)
from .errors import (
    SumCheckError,
    ConstructionError,
    InvalidDomainIndex,
    DegenerateBasis,
    VerificationError,
    ArityMismatch,
    DegreeBoundExceeded,
    ClaimMismatch,
    ConsistencyMismatch,
    FinalCheckMismatch,
    ProtocolMisuse,
)

__all__ = [
    "PrimeField",
    "FieldElement",
    "BatchInverter",
    "SparsePolynomial",
    "Term",
    "boolean_hypercube",
    "hypercube_point",
    "RandomSource",
    "SeededRandomSource",
    "SystemRandomSource",
    "ScriptedRandomSource",
    "SumCheckError",
    "ConstructionError",
    "InvalidDomainIndex",
    "DegenerateBasis",
    "VerificationError",
    "ArityMismatch",
    "DegreeBoundExceeded",
    "ClaimMismatch",
    "ConsistencyMismatch",
    "FinalCheckMismatch",
    "ProtocolMisuse",
]
