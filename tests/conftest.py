import pytest

import geoscaling as gs


@pytest.fixture(scope="session", autouse=True)
def initialised_units():
    gs.initialise()


@pytest.fixture(scope="session")
def u():
    return gs.units


@pytest.fixture(scope="session")
def CharUnits_GEO():
    return gs.geo_units()


@pytest.fixture(scope="session")
def CharUnits_SI():
    return gs.si_units()


@pytest.fixture(scope="session")
def CharUnits_NONE():
    return gs.no_units()
