from collections import Counter

import numpy as np
import pytest

from roguegrid.utils.game_rng import GameRNG


def test_get_int_is_inclusive():
    rng = GameRNG(seed=1)
    values = {rng.get_int(2, 4) for _ in range(200)}
    assert values == {2, 3, 4}
    assert rng.get_int(7, 7) == 7
    with pytest.raises(ValueError):
        rng.get_int(5, 4)


def test_same_seed_same_sequence():
    a, b = GameRNG(seed=123), GameRNG(seed=123)
    assert [a.get_int(0, 100) for _ in range(10)] == [b.get_int(0, 100) for _ in range(10)]
    assert np.array_equal(a.random_mask((4, 4), 0.5), b.random_mask((4, 4), 0.5))


def test_state_round_trip_replays_draws():
    rng = GameRNG(seed=4)
    rng.get_int(0, 10)
    state = rng.get_state()
    expected = [rng.get_float() for _ in range(5)]
    rng.set_state(state)
    assert [rng.get_float() for _ in range(5)] == expected


def test_reset_restarts_sequence():
    rng = GameRNG(seed=8)
    first = rng.spawn_child_seed()
    rng.reset(8)
    assert rng.spawn_child_seed() == first


def test_coin_flip_extremes():
    rng = GameRNG(seed=2)
    assert rng.coin_flip(1.0) == "heads"
    assert rng.coin_flip(0.0) == "tails"
    with pytest.raises(ValueError):
        rng.coin_flip(1.5)


def test_weighted_choice_respects_weights():
    rng = GameRNG(seed=6)
    counts = Counter(
        rng.weighted_choice(["a", "b"], [3, 1], cache_key=("a", "b")) for _ in range(2000)
    )
    assert 0.7 < counts["a"] / 2000 < 0.8
    assert ("a", "b") in rng.weighted_choice_cache


def test_weighted_choice_never_picks_zero_weight():
    rng = GameRNG(seed=6)
    picks = {rng.weighted_choice(["a", "b", "c"], [0, 1, 0]) for _ in range(100)}
    assert picks == {"b"}


@pytest.mark.parametrize(
    "items,weights", [([], []), (["a"], [1, 2]), (["a", "b"], [0, 0])]
)
def test_weighted_choice_invalid_inputs(items, weights):
    with pytest.raises(ValueError):
        GameRNG(seed=0).weighted_choice(items, weights)


def test_choice_and_mask_edges():
    rng = GameRNG(seed=0)
    with pytest.raises(ValueError):
        rng.choice([])
    assert not rng.random_mask((3, 3), 0.0).any()
    assert rng.random_mask((3, 3), 1.0).all()
