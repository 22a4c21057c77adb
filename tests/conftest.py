import pytest

from crate_planner.models import Crate, Truck


@pytest.fixture
def truck():
    """10 x 2.5 x 2.6 m box truck with a 1000 kg limit."""
    return Truck(length=10, width=2.5, height=2.6, unit="m", max_load=1000)


@pytest.fixture
def make_crate():
    def _make(id, weight=100, l=1.0, w=1.0, h=1.0, unit="m", label=None, on=None):
        return Crate(
            id=id, label=label or f"C{id}",
            length=l, width=w, height=h, weight=weight,
            length_unit=unit, width_unit=unit, height_unit=unit,
            stack_target_id=on,
        )
    return _make
