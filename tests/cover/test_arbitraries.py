# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from random import Random

import pytest

from arbitraries import (
    characters,
    combine,
    create,
    frequency_of,
    integers,
    just,
    lists,
    of,
    one_of,
    strings,
)
from arbitraries._settings import local_settings, settings
from arbitraries.errors import InvalidArgument, TooManyFilterMisses

from tests.common.debug import (
    assert_all_generated,
    assert_at_least_one_generated,
    generate_first,
    minimal,
)


@pytest.fixture
def random():
    return Random(42)


def test_integers_stay_in_range(random):
    generator = integers().between(-5, 5).generator(100)
    assert_all_generated(generator, random, lambda x: -5 <= x <= 5)


def test_integers_with_one_bound(random):
    assert_all_generated(
        integers().greater_or_equal(10).generator(), random, lambda x: x >= 10
    )
    assert_all_generated(
        integers().less_or_equal(-10).generator(), random, lambda x: x <= -10
    )


def test_integers_prefer_values_near_the_target(random):
    generator = integers().between(-(10**9), 10**9).generator(10)
    assert_at_least_one_generated(generator, random, lambda x: abs(x) <= 10)


@pytest.mark.parametrize(
    "configure",
    [
        lambda i: i.between(5, 1),
        lambda i: i.between(True, 3),
        lambda i: i.between(0.5, 3),
        lambda i: i.shrink_towards("0"),
    ],
)
def test_invalid_integer_configuration(configure):
    with pytest.raises(InvalidArgument):
        configure(integers())


def test_shrink_target_must_be_in_range():
    arbitrary = integers().between(0, 10).shrink_towards(20)
    with pytest.raises(InvalidArgument):
        arbitrary.generator()


def test_integers_shrink_to_smallest_failing_value():
    assert minimal(integers().between(0, 1000), lambda x: x >= 42) == 42


def test_integers_shrink_towards_target():
    assert minimal(integers().between(0, 100).shrink_towards(10)) == 10
    assert minimal(integers().between(5, 100)) == 5
    assert minimal(integers().between(-100, -5)) == -5


def test_configuration_returns_a_new_arbitrary():
    base = integers()
    bounded = base.between(0, 3)
    assert base.min_value != bounded.min_value
    assert base.max_value != bounded.max_value


def test_generation_is_reproducible():
    arbitrary = lists(integers().between(0, 100))
    first = [generate_first(arbitrary, Random(3)) for _ in range(2)]
    assert first[0] == first[1]


@pytest.mark.parametrize("size", [0, -1, 1.5])
def test_size_must_be_positive(size):
    with pytest.raises(InvalidArgument):
        integers().generator(size)


def test_just_is_always_the_same_value(random):
    assert_all_generated(just(3).generator(), random, lambda x: x == 3)


def test_of_samples_given_values(random):
    generator = of("a", "b", "c").generator()
    assert_all_generated(generator, random, lambda x: x in ("a", "b", "c"))
    assert_at_least_one_generated(generator, random, lambda x: x == "c")


def test_of_needs_values():
    with pytest.raises(InvalidArgument):
        of()


def test_create_calls_supplier_for_every_value(random):
    shrinkable = create(list).generator().next(random)
    assert shrinkable.value() == []
    assert shrinkable.value() is not shrinkable.value()


def test_map(random):
    generator = integers().between(0, 10).map(lambda x: x * 2).generator()
    assert_all_generated(generator, random, lambda x: x % 2 == 0 and x <= 20)


def test_filter(random):
    generator = integers().between(0, 10).filter(lambda x: x % 3 == 0).generator()
    assert_all_generated(generator, random, lambda x: x in (0, 3, 6, 9))


def test_filter_gives_up_eventually(random):
    with local_settings(settings(max_filter_misses=10)):
        generator = integers().between(0, 10).filter(lambda x: x > 10).generator()
        with pytest.raises(TooManyFilterMisses):
            generator.next(random)


def test_filtered_values_shrink_within_the_filter():
    arbitrary = integers().between(0, 1000).filter(lambda x: x % 2 == 1)
    assert minimal(arbitrary, lambda x: x > 100) == 101


def test_unique_never_repeats_values(random):
    with local_settings(settings(max_filter_misses=100)):
        generator = of(1, 2, 3).unique().generator()
        values = [generator.next(random).value() for _ in range(3)]
        assert sorted(values) == [1, 2, 3]
        with pytest.raises(TooManyFilterMisses):
            generator.next(random)


def test_every_generator_of_a_unique_arbitrary_starts_afresh(random):
    arbitrary = of(1, 2).unique()
    for _ in range(5):
        generator = arbitrary.generator()
        values = {generator.next(random).value() for _ in range(2)}
        assert values == {1, 2}


def test_flat_map(random):
    arbitrary = integers().between(1, 5).flat_map(
        lambda n: lists(just(n)).of_size(n)
    )
    assert_all_generated(
        arbitrary.generator(), random, lambda xs: xs and len(xs) == xs[0]
    )


def test_flat_map_shrinks_outer_value():
    arbitrary = integers().between(1, 5).flat_map(
        lambda n: lists(integers().between(0, 9)).of_size(n)
    )
    assert minimal(arbitrary) == [0]


def test_dont_shrink():
    arbitrary = integers().between(0, 1000).dont_shrink()
    shrinkable = arbitrary.generator().next(Random(1))
    assert list(shrinkable.candidates()) == []


def test_optional(random):
    assert_all_generated(of(1).optional(1.0).generator(), random, lambda x: x is None)
    assert_all_generated(of(1).optional(0.0).generator(), random, lambda x: x == 1)
    generator = of(1).optional(0.5).generator()
    assert_at_least_one_generated(generator, random, lambda x: x is None)
    assert_at_least_one_generated(generator, random, lambda x: x == 1)


def test_lists_have_sizes_in_range(random):
    generator = lists(integers()).of_min_size(2).of_max_size(4).generator()
    assert_all_generated(generator, random, lambda xs: 2 <= len(xs) <= 4)
    assert_all_generated(
        lists(integers()).of_size(3).generator(), random, lambda xs: len(xs) == 3
    )


def test_lists_shrink_towards_shorter_lists():
    arbitrary = lists(integers().between(0, 100)).of_min_size(1)
    assert minimal(arbitrary) == [0]
    assert minimal(arbitrary, lambda xs: max(xs) >= 10) == [10]


def test_invalid_list_sizes():
    with pytest.raises(InvalidArgument):
        lists(integers()).of_min_size(-1)
    with pytest.raises(InvalidArgument):
        lists(integers()).of_max_size(3).of_min_size(4)
    with pytest.raises(InvalidArgument):
        lists(3)


def test_strings(random):
    generator = strings().alpha().of_length(10).generator()
    assert_all_generated(
        generator, random, lambda s: len(s) == 10 and s.isascii() and s.isalpha()
    )
    numeric = strings().numeric().of_min_length(1).of_max_length(3).generator()
    assert_all_generated(numeric, random, lambda s: 1 <= len(s) <= 3 and s.isdigit())


def test_strings_shrink_to_first_character():
    assert minimal(strings().alpha().of_length(3)) == "aaa"
    assert minimal(strings().with_chars("x", "y", "z").of_min_length(2)) == "xx"


def test_characters(random):
    generator = characters().with_chars("x", "y").generator()
    assert_all_generated(generator, random, lambda c: c in "xy")
    assert_all_generated(
        characters().generator(),
        random,
        lambda c: len(c) == 1 and not 0xD800 <= ord(c) <= 0xDFFF,
    )


@pytest.mark.parametrize(
    "configure",
    [
        lambda c: c.with_chars("xy"),
        lambda c: c.with_char_range("z", "a"),
        lambda c: c.with_chars(1),
    ],
)
def test_invalid_characters(configure):
    with pytest.raises(InvalidArgument):
        configure(characters())


def test_one_of(random):
    generator = one_of(just(1), just(2)).generator()
    assert_all_generated(generator, random, lambda x: x in (1, 2))
    assert_at_least_one_generated(generator, random, lambda x: x == 1)
    assert_at_least_one_generated(generator, random, lambda x: x == 2)


def test_frequency_of_never_uses_zero_weights(random):
    generator = frequency_of((0, just(1)), (3, just(2))).generator()
    assert_all_generated(generator, random, lambda x: x == 2, tries=500)


@pytest.mark.parametrize(
    "weighted",
    [
        [(0, just(1))],
        [(-1, just(1)), (2, just(2))],
        [(True, just(1))],
        [(1, 2)],
        [],
    ],
)
def test_invalid_frequencies(weighted):
    with pytest.raises(InvalidArgument):
        frequency_of(*weighted)


def test_combine(random):
    arbitrary = combine(integers().between(0, 9), of("a", "b")).as_(
        lambda n, s: s * n
    )
    assert_all_generated(
        arbitrary.generator(), random, lambda s: set(s) <= {"a", "b"} and len(s) <= 9
    )
    assert minimal(arbitrary) == ""


def test_combine_needs_arbitraries():
    with pytest.raises(InvalidArgument):
        combine(integers(), 3)
    with pytest.raises(InvalidArgument):
        combine(integers()).as_(3)


def test_embedded_edge_cases_show_up(random):
    generator = integers().between(-1000, 1000).generator_with_embedded_edge_cases(1)
    assert_at_least_one_generated(generator, random, lambda x: abs(x) == 1000)


def test_example_is_a_value():
    assert 0 <= integers().between(0, 3).example(Random(0)) <= 3


def test_reprs():
    assert repr(integers().between(0, 3)) == "integers().between(0, 3)"
    assert repr(of(1, 2)) == "of(1, 2)"
    assert repr(just(1).map(str)) == "just(1).map(str)"
    assert repr(just(1).filter(lambda x: x > 0)) == "just(1).filter(lambda x: x > 0)"
