"""Exception taxonomy for the lazy_combinatorics package.

Every error raised by the package is synchronous and local to the call
that triggered it (construction or element access) and is never
deferred to a later pull.

Hierarchy::

    CombinatoricsError
    ├── ConfigurationError            (also a ValueError)
    ├── CapacityExceededError         (also an OverflowError)
    └── ArithmeticInvariantViolation  (also a RuntimeError)

The builtin mix-ins let callers that only know about the standard
exception types keep catching ``ValueError`` / ``OverflowError``.
"""

from __future__ import annotations


class CombinatoricsError(Exception):
    """Base class for all errors raised by lazy_combinatorics."""


class ConfigurationError(CombinatoricsError, ValueError):
    """Invalid or out-of-cap construction parameters.

    Raised eagerly, before any precomputed table is built.  The message
    names the offending parameter.
    """


class CapacityExceededError(CombinatoricsError, OverflowError):
    """A native-width index type cannot represent a value exactly.

    Width resolution catches this under the ``"auto"`` policy and falls
    back to arbitrary precision.  It only escapes to the caller when
    native width was requested explicitly.
    """


class ArithmeticInvariantViolation(CombinatoricsError, RuntimeError):
    """An unranking step produced a digit outside its valid range.

    Signals a programming error.  Not recoverable, never retried.
    """
