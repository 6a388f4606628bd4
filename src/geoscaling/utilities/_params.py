"""
Model parameters with command-line overrides.

A ``Params`` holds the characteristic values of a model (and any other
scalar setting of a model script). Every value can be replaced from the
command line with a single-dash flag of the same name::

    params = gs.Params(
        system="GEO",
        length=1000 * gs.units.km,
        temperature=1000 * gs.units.K,
        stress=10 * gs.units.MPa,
        viscosity=1e20 * gs.units.Pa * gs.units.s,
    )
    CharUnits = params.registry()

    $ python model.py -length 660km -stress 100

Pint defaults are parsed with Pint, so any compatible unit is accepted;
a bare number is taken to be in the units of the default.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Any

import pint

logger = logging.getLogger(__name__)

# keywords understood by the registry factories
SCALING_KEYS = ("length", "temperature", "stress", "viscosity")


@dataclass
class _Entry:
    default: Any
    value: Any
    origin: str = "default"


def _from_text(name: str, text: str, default):
    if isinstance(default, pint.Quantity):
        from ..scaling import units

        value = units.Quantity(text)
        if value.unitless:
            return units.Quantity(float(value.magnitude), default.units)
        # raises DimensionalityError for a length given in seconds etc.
        value.to(default.units)
        return value
    if isinstance(default, bool):
        flag = text.lower()
        if flag in ("1", "true", "yes", "on"):
            return True
        if flag in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"-{name}: cannot interpret {text!r} as a boolean")
    if isinstance(default, (int, float)):
        return type(default)(text)
    return text


class Params:
    """
    Characteristic values and other model settings.

    Options on the command line that do not name one of the parameters
    are left alone, so solver options can be passed in the same command.

    Example:
        >>> params = Params(system="GEO", length=1000 * units.km)
        >>> params.length = 660 * units.km
        >>> params.source("length")
        'override'
        >>> g = params.registry()
    """

    def __init__(self, _argv=None, **defaults):
        argv = sys.argv[1:] if _argv is None else _argv

        parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
        for name in defaults:
            parser.add_argument(f"-{name}", dest=name)
        given, _ = parser.parse_known_args(argv)

        entries = {}
        for name, default in defaults.items():
            text = getattr(given, name)
            if text is None:
                entries[name] = _Entry(default, default)
            else:
                value = _from_text(name, text, default)
                entries[name] = _Entry(default, value, "cli")
                logger.info(f"{name} = {value} (from -{name})")
        object.__setattr__(self, "_entries", entries)

    def _entry(self, name):
        try:
            return self._entries[name]
        except KeyError:
            raise AttributeError(f"No parameter named '{name}'") from None

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return self._entry(name).value

    def __setattr__(self, name, value):
        if name not in self._entries:
            raise AttributeError(
                f"Cannot add new parameter '{name}', known: {', '.join(self._entries)}"
            )
        entry = self._entries[name]
        entry.value = value
        entry.origin = "override"

    def source(self, name: str) -> str:
        """``'default'``, ``'cli'`` or ``'override'``"""
        return self._entry(name).origin

    def to_dict(self) -> dict:
        return {name: entry.value for name, entry in self._entries.items()}

    def registry(self, system=None):
        """
        Build the ``ScaleRegistry`` from the characteristic values held here.

        The unit system is ``system`` if given, otherwise the ``system``
        parameter, otherwise GEO. Parameters the factories do not know
        about are ignored.
        """
        from ..scaling import make_registry

        values = self.to_dict()
        if system is None:
            system = values.get("system", "GEO")
        kwargs = {key: values[key] for key in SCALING_KEYS if key in values}
        return make_registry(system, **kwargs)

    def __repr__(self):
        items = []
        for name, entry in self._entries.items():
            value = entry.value
            text = f"{value:~}" if isinstance(value, pint.Quantity) else repr(value)
            if entry.origin != "default":
                text += f" [{entry.origin}]"
            items.append(f"{name}={text}")
        return f"Params({', '.join(items)})"
