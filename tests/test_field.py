"""Tests for prime field arithmetic."""

import random

import numpy as np
import pytest

from sumcheck_toolkit.common.field import BatchInverter, FieldElement, PrimeField


class TestFieldElement:

    def test_reduces_on_construction(self, field):
        assert field.element(75).value == 4
        assert field.element(-1).value == 70

    def test_arithmetic(self, field):
        a = field.element(45)
        b = field.element(67)
        assert a + b == 41
        assert a - b == 49
        assert a * b == 33
        assert (a / b) * b == a
        assert -a == 26

    def test_mixed_with_ints(self, field):
        a = field.element(5)
        assert 1 - a == 67
        assert 2 * a == 10
        assert a + 70 == 4
        assert 1 / a == a.inverse()

    def test_pow(self, field):
        a = field.element(3)
        assert a ** 0 == 1
        assert a ** 4 == 81 % 71
        assert a ** -1 == a.inverse()
        # Fermat: a^(p-1) = 1
        assert (a ** 70).is_one()

    def test_inverse(self, field):
        for v in range(1, 71):
            assert (field.element(v) * field.element(v).inverse()).is_one()

    def test_inverse_of_zero_raises(self, field):
        with pytest.raises(ValueError):
            field.zero().inverse()
        with pytest.raises(ValueError):
            field.one() / 0

    def test_different_fields_do_not_mix(self, field):
        other = PrimeField(13)
        with pytest.raises(ValueError):
            field.element(3) + other.element(3)
        assert field.element(3) != other.element(3)

    def test_equality_and_hash(self, field):
        assert field.element(3) == FieldElement(74, PrimeField(71))
        assert field.element(3) == 3
        assert field.element(3) != "3"
        assert len({field.element(3), field.element(74)}) == 1


class TestPrimeField:

    def test_rejects_tiny_modulus(self):
        with pytest.raises(ValueError):
            PrimeField(1)

    def test_random_with_seeded_rng(self, field):
        first = [field.random(random.Random(9)) for _ in range(3)]
        second = [field.random(random.Random(9)) for _ in range(3)]
        assert first == second
        assert all(not field.random(random.Random(i), exclude_zero=True).is_zero()
                   for i in range(50))

    def test_element_rejects_foreign_element(self, field):
        with pytest.raises(ValueError):
            field.element(PrimeField(13).one())


class TestBatchInverter:

    def test_matches_individual_inverses(self, field):
        elements = [field.element(i) for i in range(1, 20)]
        inverses = BatchInverter(field).invert_batch(elements)
        assert inverses == [e.inverse() for e in elements]

    def test_empty_batch(self, field):
        assert BatchInverter(field).invert_batch([]) == []

    def test_zero_in_batch_raises(self, field):
        with pytest.raises(ValueError):
            BatchInverter(field).invert_batch([field.one(), field.zero()])


class TestIntegerOnly:

    def test_floats_rejected(self, field):
        with pytest.raises(TypeError):
            field.element(1.5)
        with pytest.raises(TypeError):
            FieldElement(0.5, field)
        with pytest.raises(TypeError):
            1.5 / field.element(2)
        with pytest.raises(TypeError):
            field.element(2) + 0.5

    def test_numpy_integers_accepted(self, field):
        assert field.element(np.int64(75)) == 4
        assert type(field.element(np.int64(75)).value) is int
        assert field.element(3) * np.int32(2) == 6
