import math

import pytest

from crate_planner.packer import place_floor, resolve_stacks


def test_heaviest_goes_left_next_goes_right(truck, make_crate):
    crates = [make_crate(1, weight=90), make_crate(2, weight=100)]
    placed, overflow = place_floor(truck, crates)
    assert overflow == []
    by_id = {p.id: p for p in placed}
    assert by_id[2].position == pytest.approx((0.5, 0.5, 0.5))
    assert by_id[1].position == pytest.approx((0.5, 0.5, 2.0))
    assert [p.id for p in placed] == [2, 1]
    assert (by_id[2].lane, by_id[1].lane) == ("left", "right")


def test_lane_tie_favors_left(truck, make_crate):
    crates = [make_crate(i, weight=50) for i in (1, 2, 3)]
    placed, _ = place_floor(truck, crates)
    assert [p.lane for p in placed] == ["left", "right", "left"]
    assert placed[2].position == pytest.approx((1.5, 0.5, 0.5))


def test_equal_weights_keep_input_order(truck, make_crate):
    crates = [make_crate(i, weight=10) for i in (5, 3, 9, 1)]
    placed, _ = place_floor(truck, crates)
    assert [p.id for p in placed] == [5, 3, 9, 1]


def test_too_long_crate_overflows(truck, make_crate):
    placed, overflow = place_floor(truck, [make_crate(7, l=11)])
    assert placed == []
    assert overflow == [7]


def test_too_tall_and_too_wide_overflow(truck, make_crate):
    crates = [make_crate(1, h=2.7), make_crate(2, w=2.6), make_crate(3)]
    placed, overflow = place_floor(truck, crates)
    assert overflow == [1, 2]
    # rejected crates did not consume lane space
    assert placed[0].position == pytest.approx((0.5, 0.5, 0.5))


def test_crate_filling_the_whole_truck_is_accepted(truck, make_crate):
    placed, overflow = place_floor(truck, [make_crate(1, l=10, w=2.5, h=2.6)])
    assert overflow == []
    assert placed[0].position == pytest.approx((5.0, 1.3, 1.25))


def test_lane_runs_out_of_length(truck, make_crate):
    crates = [make_crate(i, weight=100 - i, l=4) for i in range(1, 7)]
    placed, overflow = place_floor(truck, crates)
    # each lane holds two 4 m crates; the third one per lane would end at 12 m
    assert [p.id for p in placed] == [1, 2, 3, 4]
    assert overflow == [5, 6]


def test_centimeter_crates(truck, make_crate):
    placed, _ = place_floor(truck, [make_crate(1, l=120, w=80, h=60, unit="cm")])
    assert placed[0].position == pytest.approx((0.6, 0.3, 0.4))


@pytest.mark.parametrize("kwargs", [dict(l=0), dict(w=-1), dict(h=math.inf), dict(weight=math.nan)])
def test_degenerate_crates_overflow_without_using_lane(truck, make_crate, kwargs):
    crates = [make_crate(1, **kwargs), make_crate(2, weight=1)]
    placed, overflow = place_floor(truck, crates)
    assert overflow == [1]
    assert placed[0].position == pytest.approx((0.5, 0.5, 0.5))


def test_stacked_crates_are_ignored_by_floor_planner(truck, make_crate):
    placed, overflow = place_floor(truck, [make_crate(1), make_crate(2, on=1)])
    assert [p.id for p in placed] == [1]
    assert overflow == []


def test_stack_sits_on_base(truck, make_crate):
    crates = [make_crate(1, h=1.0), make_crate(2, h=0.5, on=1)]
    floor, _ = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert overflow == []
    assert stacked[0].position == pytest.approx((0.5, 1.25, 0.5))
    assert stacked[0].lane == "stack"


def test_stack_follows_base_in_right_lane(truck, make_crate):
    crates = [make_crate(1, weight=200), make_crate(2, weight=100, w=0.8), make_crate(3, w=0.8, h=0.4, on=2)]
    floor, _ = place_floor(truck, crates)
    stacked, _ = resolve_stacks(truck, crates, floor)
    assert stacked[0].position == pytest.approx((0.5, 1.2, 2.1))


def test_stack_on_overflowed_base_overflows(truck, make_crate):
    crates = [make_crate(1, l=11), make_crate(2, on=1)]
    floor, floor_ov = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert floor_ov == [1]
    assert stacked == []
    assert overflow == [2]


def test_stack_on_missing_or_stacked_crate_overflows(truck, make_crate):
    crates = [make_crate(1), make_crate(2, on=1), make_crate(3, on=2), make_crate(4, on=99), make_crate(5, on=5)]
    floor, _ = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert [p.id for p in stacked] == [2]
    assert overflow == [3, 4, 5]


def test_stack_taller_than_truck_overflows(truck, make_crate):
    crates = [make_crate(1, h=2.0), make_crate(2, h=0.7, on=1)]
    floor, _ = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert stacked == []
    assert overflow == [2]


def test_stack_reaching_roof_exactly_is_accepted(truck, make_crate):
    crates = [make_crate(1, h=2.0), make_crate(2, h=0.6, on=1)]
    floor, _ = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert overflow == []
    assert stacked[0].position[1] == pytest.approx(2.3)


def test_stack_overhanging_front_wall_overflows(truck, make_crate):
    crates = [make_crate(1, l=0.5), make_crate(2, l=2.0, h=0.5, on=1)]
    floor, _ = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert stacked == []
    assert overflow == [2]


def test_stack_overhanging_base_but_inside_truck(truck, make_crate):
    crates = [make_crate(1, l=2.0, w=1.0), make_crate(2, l=1.0, w=2.0, h=0.5, on=1)]
    floor, _ = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert overflow == [2]  # z = 0.5, so a 2 m wide top would stick out of the left wall
    # third floor crate sits at x = 1.5 in the left lane, so a 2 m top still clears the front wall
    crates = [make_crate(1, weight=300), make_crate(2, weight=200), make_crate(3), make_crate(4, l=2.0, h=0.5, on=3)]
    floor, _ = place_floor(truck, crates)
    stacked, overflow = resolve_stacks(truck, crates, floor)
    assert overflow == []
    assert stacked[0].position == pytest.approx((1.5, 1.25, 0.5))
