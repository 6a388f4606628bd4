"""
Material Parameter Structures

This module provides the base classes for material parameter structures
(a density law, a melting law, ...) and for the phase structures that
collect them. Parameter structures are immutable; every GeoUnit field can
be transformed (e.g. non-dimensionalised) through ``transform_units``,
which returns a new structure.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Tuple

from .function.quantities import GeoUnit


def unit_field(val, unit=None):
    """A dataclass field defaulting to ``GeoUnit(val, unit)``."""
    return field(default_factory=lambda: GeoUnit(val, unit))


@dataclass(frozen=True)
class MaterialParamsInfo:
    """
    Information about a material parameter structure.

    Attributes:
    -----------
    Equation : str
        LaTeX form of the equation implemented
    Comment : str
        Human-readable description
    BibTex_Reference : str
        Literature reference
    """

    Equation: str = ""
    Comment: str = ""
    BibTex_Reference: str = ""


@dataclass(frozen=True)
class AbstractMaterialParam:
    """
    Base class of all material parameter structures.

    Subclasses are frozen dataclasses whose physical parameters are fields
    annotated as ``GeoUnit``. Values given for those fields are converted
    to ``GeoUnit`` on construction.

    Structures compare equal field by field. Like ``GeoUnit`` they are not
    hashable, so they cannot be used as dict keys or in sets.
    """

    def __post_init__(self):
        for f in fields(self):
            if f.type is GeoUnit or f.type == "GeoUnit":
                val = getattr(self, f.name)
                if not isinstance(val, GeoUnit):
                    object.__setattr__(self, f.name, GeoUnit(val))

    def unit_fields(self) -> Tuple[str, ...]:
        """Names of all GeoUnit fields."""
        return tuple(
            f.name for f in fields(self) if isinstance(getattr(self, f.name), GeoUnit)
        )

    def transform_units(self, transform: Callable[[GeoUnit], Any]):
        """Return a copy with ``transform`` applied to every GeoUnit field."""
        changes = {name: transform(getattr(self, name)) for name in self.unit_fields()}
        return replace(self, **changes)

    @property
    def isdimensional(self) -> bool:
        """True if any of the parameters is in dimensional units."""
        return any(getattr(self, name).isdimensional for name in self.unit_fields())

    def unpack_units(self, *names):
        """Parameters with units (or bare numbers once non-dimensional)."""
        values = tuple(getattr(self, name).unit_value for name in names)
        return values[0] if len(values) == 1 else values

    def unpack_val(self, *names):
        """Numerical values of the parameters, without units."""
        values = tuple(getattr(self, name).val for name in names)
        return values[0] if len(values) == 1 else values

    def param_info(self) -> MaterialParamsInfo:
        return MaterialParamsInfo()


class AbstractPhaseDiagramsStruct:
    """
    Base class of tabulated data (phase diagrams) that stand in for a
    formula-based parameter. Tables are not converted field by field; they
    are rebuilt against a new set of characteristic values instead.
    """

    def rebuild(self, char_dim):
        """Return the table re-read with characteristic values ``char_dim``
        (or in dimensional units if ``char_dim`` is None)."""
        raise NotImplementedError

    @property
    def isdimensional(self) -> bool:
        raise NotImplementedError


class AbstractMaterialParamsStruct:
    """
    Base class of phase structures: frozen dataclasses whose fields hold
    tuples of alternative parameter structures (and possibly phase
    diagrams), plus a ``nondimensional`` marker field.
    """

    _convertible = (AbstractMaterialParam, AbstractPhaseDiagramsStruct)

    def transform_units(self, transform: Callable[[Any], Any]):
        """
        Return a copy with ``transform`` applied to every parameter
        structure (or phase diagram) held in a tuple field.
        """
        changes = {}
        for f in fields(self):
            fld = getattr(self, f.name)
            if not isinstance(fld, tuple) or len(fld) == 0:
                continue
            if any(isinstance(item, self._convertible) for item in fld):
                changes[f.name] = tuple(
                    transform(item) if isinstance(item, self._convertible) else item
                    for item in fld
                )
        return replace(self, **changes)

    def with_nondimensional(self, nondimensional: bool):
        """Return a copy with the ``nondimensional`` marker set."""
        return replace(self, nondimensional=nondimensional)

    @property
    def isdimensional(self) -> bool:
        return not self.nondimensional
