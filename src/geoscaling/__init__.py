"""
geoscaling - non-dimensionalisation for geodynamic models

Characteristic values are collected in a ``ScaleRegistry`` (``geo_units``,
``si_units`` or ``no_units``). Values, material parameters and whole
material phases are then scaled with ``nondimensionalize`` and brought
back with ``dimensionalize``.

>>> import geoscaling as gs
>>> u = gs.units
>>> CharUnits = gs.geo_units()
>>> gs.nondimensionalize(3 * u.cm / u.yr, CharUnits)
0.009506426344208684
"""

from ._version import __version__

from .units import (
    UnitsError,
    DimensionalityError,
    NoUnitsError,
    ValidationError,
    DimensionMismatchError,
    TypeCoercionError,
    is_dimensional,
    num_value,
    value,
    unit_value,
    unit_of,
)

import geoscaling.function
import geoscaling.scaling
import geoscaling.utilities

from .function import GeoUnit, geounit
from .scaling import (
    units,
    initialise,
    is_initialised,
    Dimension,
    UnitSystem,
    ScaleRegistry,
    geo_units,
    si_units,
    no_units,
    make_registry,
    compute_units,
    nondimensionalize,
    dimensionalize,
    non_dimensionalise,
    dimensionalise,
)
from .parameters import (
    AbstractMaterialParam,
    AbstractMaterialParamsStruct,
    AbstractPhaseDiagramsStruct,
    MaterialParamsInfo,
)
from .materials import MaterialParams, set_material_params
from .melting import MeltingParamCaricchi, compute_meltfraction
from .density import ConstantDensity, PTDensity, compute_density
from .phase_diagram import PhaseDiagramLookupTable
from .utilities import Params
