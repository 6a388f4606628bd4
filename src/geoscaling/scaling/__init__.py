"""
The scaling module provides units and scaling capabilities.
"""

from ._scaling import initialise
from ._scaling import is_initialised
from ._scaling import u as units
from ._scaling import Dimension
from ._scaling import PINT_DIMENSIONS
from ._scaling import compute_units
from ._scaling import nondimensionalize
from ._scaling import dimensionalize
from ._scaling import non_dimensionalise
from ._scaling import dimensionalise
from ._scaling import ndargs
from ._scaling import km, m, cm, mm, um, yr, s, kg, Pa, MPa, kbar, Pas, K, C
from ._scaling import mol, kJ, J, Watt, uW

from ._registry import UnitSystem
from ._registry import ScaleRegistry
from ._registry import geo_units
from ._registry import si_units
from ._registry import no_units
from ._registry import make_registry
