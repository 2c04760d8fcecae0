import pytest

from cavecrawl.cave.noise import NoiseField, sample, value_noise


def test_noise_stays_in_unit_interval():
    for i in range(40):
        for j in range(40):
            v = sample(i * 1.37 - 20, j * 0.91 + 3, 0.1)
            assert 0.0 <= v < 1.0


def test_noise_is_stateless():
    first = [sample(x, x * 2, 0.18) for x in range(25)]
    second = [sample(x, x * 2, 0.18) for x in range(25)]
    assert first == second


def test_noise_is_continuous_between_lattice_points():
    for x in (0.2, 3.5, 17.9, -4.25):
        a = value_noise(x, 1.3)
        b = value_noise(x + 0.001, 1.3)
        assert abs(a - b) < 0.01


def test_lattice_points_match_integer_samples():
    assert value_noise(5, 9) == value_noise(5.0, 9.0)


@pytest.mark.parametrize("offset", [1, 99, 1234567])
def test_seed_offset_gives_independent_field(offset):
    base = [sample(x, 7, 0.5) for x in range(30)]
    salted = [sample(x, 7, 0.5, offset) for x in range(30)]
    assert base != salted


def test_noise_field_matches_sample():
    field = NoiseField(scale=0.25, seed_offset=3)
    assert field(12, -8) == sample(12, -8, 0.25, 3)
