"""
Material phases for geodynamic models

This module provides the phase structure, which collects the material
parameter structures (density law, melting law, ...) of one material
phase, and the routines that evaluate a law for a phase or for a set of
phases.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

import numpy as np
import pint

from .parameters import AbstractMaterialParamsStruct
from .units import num_value


@dataclass(frozen=True)
class MaterialParams(AbstractMaterialParamsStruct):
    """
    Material parameters of one phase.

    Attributes:
    -----------
    name : str
        Phase name (e.g., 'mantle', 'crust')
    phase : int
        Phase number, used to look the phase up in a phase array
    nondimensional : bool
        True once all parameters have been non-dimensionalised
    density : tuple
        Density laws (or a phase diagram)
    melting : tuple
        Melting parameterisations (or a phase diagram)
    """

    name: str = ""
    phase: int = 1
    nondimensional: bool = False
    density: tuple = ()
    melting: tuple = ()


def _as_tuple(val):
    if val is None:
        return ()
    if isinstance(val, (list, tuple)):
        return tuple(val)
    return (val,)


def set_material_params(
    name: str = "",
    phase: int = 1,
    density=None,
    melting=None,
    char_dim=None,
) -> MaterialParams:
    """
    Create the material parameters of a phase.

    Parameters:
    -----------
    name : str
        Phase name
    phase : int
        Phase number
    density, melting : parameter structure or sequence of them
        The laws for this phase
    char_dim : ScaleRegistry, optional
        If given, the phase is non-dimensionalised with these
        characteristic values

    Example:
    --------
    >>> phase = set_material_params(
    ...     name="granite", phase=1,
    ...     density=ConstantDensity(rho=2700 * u.kg / u.m**3),
    ...     melting=MeltingParamCaricchi(),
    ...     char_dim=geo_units(),
    ... )
    """
    phase_mat = MaterialParams(
        name=name,
        phase=phase,
        density=_as_tuple(density),
        melting=_as_tuple(melting),
    )
    if char_dim is not None:
        from .scaling import nondimensionalize

        phase_mat = nondimensionalize(phase_mat, char_dim)
    return phase_mat


def compute_param(
    law: Callable,
    field_name: str,
    p: Any,
    P,
    T,
    out: Optional[np.ndarray] = None,
    phases: Optional[np.ndarray] = None,
):
    """
    Evaluate ``law(p, P, T)`` for a parameter structure, a phase or a set
    of phases.

    Parameters:
    -----------
    law : callable
        ``law(p, P, T)`` evaluates one parameter structure
    field_name : str
        Phase field holding the structures ``law`` applies to
    p : parameter structure, MaterialParams or sequence of MaterialParams
        What to evaluate. For a phase, the first entry of ``field_name`` is
        used (zero if there is none). For a sequence of phases, ``phases``
        gives the phase number of every point.
    P, T : number, array or pint.Quantity
        Pressure and temperature
    out : np.ndarray, optional
        Array to store the result in
    phases : array of int, optional
        Phase numbers, same shape as ``T``

    Returns:
    --------
    The evaluated law (``out`` if given)
    """
    if isinstance(p, (list, tuple)) and all(isinstance(m, MaterialParams) for m in p):
        if phases is None:
            raise ValueError("A phase array is required to evaluate several phases")
        result = _phase_loop(law, field_name, p, P, T, np.asarray(phases))
    elif isinstance(p, MaterialParams):
        entries = getattr(p, field_name)
        if len(entries) == 0:
            # in case there is a phase with no parameterisation
            result = np.zeros_like(np.asarray(num_value(T), dtype=float))
            if result.ndim == 0:
                result = result[()]
        else:
            result = law(entries[0], P, T)
    else:
        result = law(p, P, T)

    if out is not None:
        out[...] = num_value(result)
        return out
    return result


def _with_units(val, shape=None):
    """Float array of ``val`` (broadcast to ``shape``), keeping Pint units."""
    mag = np.asarray(num_value(val), dtype=float)
    if shape is not None:
        mag = np.broadcast_to(mag, shape)
    if isinstance(val, pint.Quantity):
        from .scaling import units

        return units.Quantity(mag, val.units)
    return mag


def _phase_loop(law, field_name, params: Sequence[MaterialParams], P, T, phases):
    T = _with_units(T)
    shape = np.shape(num_value(T))
    P = _with_units(P, shape)

    result = np.zeros(shape, dtype=float)
    result_units = None
    for mat in params:
        if len(getattr(mat, field_name)) == 0:
            continue
        ind = phases == mat.phase
        if not np.any(ind):
            continue
        val = law(getattr(mat, field_name)[0], P[ind], T[ind])
        # dimensional phases return quantities; all phases share the first units
        if isinstance(val, pint.Quantity):
            if result_units is None:
                result_units = val.units
            val = val.to(result_units).magnitude
        result[ind] = val

    if result_units is not None:
        from .scaling import units

        return units.Quantity(result, result_units)
    return result
