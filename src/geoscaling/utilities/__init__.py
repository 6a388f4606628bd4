r"""
Utility functions and infrastructure for geoscaling.

Configuration
-------------
Params
    Parameter container with command-line overrides.
"""

from ._params import Params
