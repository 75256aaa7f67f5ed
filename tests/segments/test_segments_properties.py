# test_segments_properties.py
"""
Proprietà di IntensitySegments su sequenze casuali di operazioni.

Confronto con un modello denso: un array di intensità su coordinate
intere. Con coordinate intere i breakpoint canonici sono esattamente
i punti in cui il modello denso cambia valore.
"""

import random

import pytest
from segments.intensity_segments import IntensitySegments


LOW, HIGH = -20, 20
SEEDS = list(range(12))


# =============================================================================
# HELPERS
# =============================================================================

def random_operation(rng):
    from_ = rng.randint(LOW, HIGH - 1)
    to = rng.randint(from_ + 1, HIGH)
    amount = rng.randint(-3, 3)
    op = rng.choice(['add', 'add', 'set'])
    return op, from_, to, amount


def apply_dense(dense, op, from_, to, amount):
    for x in range(from_, to):
        if op == 'add':
            dense[x] += amount
        else:
            dense[x] = amount


def dense_breakpoints(dense):
    """Breakpoint canonici del modello denso (0 fuori da [LOW, HIGH))."""
    points = []
    previous = 0
    for x in range(LOW, HIGH + 1):
        value = dense.get(x, 0)
        if value != previous:
            points.append([x, value])
            previous = value
    return points


def assert_canonical(segments):
    points = segments.breakpoints
    if not points:
        return
    assert points[0][1] != 0, "primo breakpoint a zero"
    assert points[-1][1] == 0, "ultimo breakpoint diverso da zero"
    for (_, left), (_, right) in zip(points, points[1:]):
        assert left != right, f"valori adiacenti uguali in {points}"


@pytest.fixture(params=SEEDS)
def rng(request):
    return random.Random(request.param)


# =============================================================================
# TEST
# =============================================================================

class TestAgainstDenseModel:

    def test_random_sequence_matches_dense_model(self, rng):
        segments = IntensitySegments()
        dense = {x: 0 for x in range(LOW, HIGH)}

        for _ in range(40):
            op, from_, to, amount = random_operation(rng)
            getattr(segments, op)(from_, to, amount)
            apply_dense(dense, op, from_, to, amount)

            assert segments.breakpoints == dense_breakpoints(dense)
            assert_canonical(segments)


class TestAlgebraicProperties:

    def _random_state(self, rng, n_ops=15):
        segments = IntensitySegments()
        for _ in range(n_ops):
            op, from_, to, amount = random_operation(rng)
            getattr(segments, op)(from_, to, amount)
        return segments

    def test_add_then_retract_restores_state(self, rng):
        segments = self._random_state(rng)
        before = segments.to_string()

        _, from_, to, amount = random_operation(rng)
        segments.add(from_, to, amount)
        segments.add(from_, to, -amount)

        assert segments.to_string() == before

    def test_repeated_set_is_idempotent(self, rng):
        segments = self._random_state(rng)

        _, from_, to, amount = random_operation(rng)
        segments.set(from_, to, amount)
        once = segments.to_string()
        segments.set(from_, to, amount)

        assert segments.to_string() == once

    def test_merge_keys_is_idempotent(self, rng):
        segments = self._random_state(rng)
        segments._merge_keys()
        once = segments.to_string()
        segments._merge_keys()

        assert segments.to_string() == once
