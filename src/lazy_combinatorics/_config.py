"""Width-policy configuration for the lazy_combinatorics package.

Controls whether constructed families may use the native fixed-width
(``numpy.int64``) index representation or must use arbitrary-precision
Python integers.

Resolution order (first match wins):
    1. Programmatic override via :func:`set_width_policy`.
    2. The ``LAZY_COMBINATORICS_WIDTH`` environment variable.
    3. ``"auto"``: native width whenever the family's exact cardinality
       (and the family's intermediate-product margin) fits, arbitrary
       precision otherwise.

Valid policy names are ``"auto"``, ``"native"`` and ``"big"``
(case-insensitive).  ``"native"`` is an explicit request and is never
silently degraded: if a family cannot be represented natively,
construction raises :class:`~lazy_combinatorics.CapacityExceededError`.

Examples:
    Force arbitrary precision globally from the shell::

        export LAZY_COMBINATORICS_WIDTH=big

    Force arbitrary precision programmatically::

        import lazy_combinatorics
        lazy_combinatorics.set_width_policy("big")

    Re-enable auto-detection::

        lazy_combinatorics.set_width_policy("auto")
"""

from __future__ import annotations

import os

from ._errors import ConfigurationError

_ENV_VAR = "LAZY_COMBINATORICS_WIDTH"

_VALID_POLICIES = {"auto", "native", "big"}

# Sentinel indicating "no programmatic override has been set".
_width_override: str | None = None


def normalise_policy(name: str) -> str:
    """Return the canonical spelling of policy *name*.

    Raises:
        ConfigurationError: If *name* is not a recognised policy.
    """
    normalised = name.strip().lower()
    if normalised not in _VALID_POLICIES:
        raise ConfigurationError(
            f"Unknown width policy '{name}'. Choose from: {sorted(_VALID_POLICIES)}"
        )
    return normalised


def get_width_policy() -> str:
    """Return the active width policy (``"auto"``, ``"native"`` or ``"big"``).

    Resolution order:
        1. Value set by :func:`set_width_policy` (unless ``"auto"``).
        2. ``LAZY_COMBINATORICS_WIDTH`` environment variable.
        3. ``"auto"``.

    Unrecognised environment values are ignored.
    """
    # 1. Programmatic override
    if _width_override is not None and _width_override != "auto":
        return _width_override

    # 2. Environment variable
    env = os.environ.get(_ENV_VAR, "").strip().lower()
    if env in _VALID_POLICIES:
        return env

    # 3. Default
    return "auto"


def set_width_policy(name: str) -> None:
    """Override the width policy.

    Args:
        name: One of ``"auto"``, ``"native"`` or ``"big"``
            (case-insensitive).  ``"auto"`` restores the default
            resolution order.

    Raises:
        ConfigurationError: If *name* is not a recognised policy.
    """
    global _width_override
    _width_override = normalise_policy(name)
