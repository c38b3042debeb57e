"""Initial mass function (relative likelihood of a stellar mass)."""

import numpy as np


def kroupa(mass, reference_mass: float = 1.0):
    """
    Kroupa-style broken power law.

    Three regimes relative to reference_mass:
        mass < 0.08 * ref          -> mass^-0.3
        0.08 * ref <= mass < 0.5   -> mass^-1.3
        mass >= 0.5 * ref          -> mass^-2.3

    The breakpoints are not smoothed. Accepts a scalar or an ndarray.
    """
    if isinstance(mass, np.ndarray):
        return np.where(
            mass < 0.08 * reference_mass,
            mass ** -0.3,
            np.where(mass < 0.5 * reference_mass, mass ** -1.3, mass ** -2.3),
        )

    if mass < 0.08 * reference_mass:
        return mass ** -0.3
    elif mass < 0.5 * reference_mass:
        return mass ** -1.3
    return mass ** -2.3
