# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import threading
import time
from abc import ABC, abstractmethod
from random import Random

import pytest

from arbitraries import (
    for_type,
    integers,
    just,
    of,
    register_type_arbitrary,
)
from arbitraries.errors import CannotFindArbitrary, InvalidArgument, NoCreatorsFound
from arbitraries.types import _type_arbitraries

from tests.common.debug import (
    assert_all_generated,
    assert_at_least_one_generated,
    collect_edge_case_values,
    generate_first,
    minimal,
)


class Point:
    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    def __eq__(self, other):
        return isinstance(other, Point) and (self.x, self.y) == (other.x, other.y)

    def __repr__(self):
        return f"Point({self.x!r}, {self.y!r})"


class Money:
    def __init__(self, amount: int, currency="EUR"):
        self.amount = amount
        self.currency = currency

    @classmethod
    def of(cls, amount: int) -> "Money":
        return cls(amount, "USD")

    @staticmethod
    def zero() -> "Money":
        return Money(0, "CHF")

    @staticmethod
    def _unchecked(amount: int) -> "Money":
        return Money(amount, "XXX")

    @staticmethod
    def describe(amount: int) -> str:
        return f"{amount} EUR"


class Flag:
    def __init__(self, on: bool):
        self.on = on

    def __eq__(self, other):
        return isinstance(other, Flag) and self.on == other.on


class Shape(ABC):
    @abstractmethod
    def area(self):
        pass


class Segment:
    def __init__(self, start: Point, end: Point):
        self.start = start
        self.end = end


def positional_point(x: int, /):
    return Point(x, x)


@pytest.fixture
def registered_points():
    register_type_arbitrary(
        Point,
        lambda: for_type(Point, resolve_parameter=lambda t: [integers().between(0, 3)]),
    )
    yield
    del _type_arbitraries[Point]


def test_uses_constructor_and_public_factory_methods_by_default():
    arbitrary = for_type(Money)
    assert arbitrary.creators() == [Money, Money.of, Money.zero]
    generator = arbitrary.generator()
    assert_all_generated(
        generator, Random(0), lambda m: m.currency in ("EUR", "USD", "CHF")
    )
    for currency in ("EUR", "USD", "CHF"):
        assert_at_least_one_generated(
            generator, Random(0), lambda m, c=currency: m.currency == c
        )


def test_can_use_only_factory_methods():
    arbitrary = for_type(Money).use_public_factory_methods()
    assert arbitrary.creators() == [Money.of, Money.zero]
    assert_all_generated(
        arbitrary.generator(), Random(0), lambda m: m.currency in ("USD", "CHF")
    )


def test_can_use_all_factory_methods():
    arbitrary = for_type(Money).use_all_factory_methods()
    assert arbitrary.creators() == [Money.of, Money.zero, Money._unchecked]


def test_can_use_only_constructors():
    arbitrary = for_type(Money).use_public_constructors()
    assert arbitrary.creators() == [Money]
    assert_all_generated(
        arbitrary.generator(), Random(0), lambda m: m.currency == "EUR"
    )


def test_configuration_adds_up_after_the_first_call():
    arbitrary = (
        for_type(Money)
        .use(lambda: Money(7, "GBP"))
        .use_factory_methods(lambda f: f.__name__ == "zero")
    )
    assert len(arbitrary.creators()) == 2
    assert_all_generated(
        arbitrary.generator(),
        Random(0),
        lambda m: (m.amount, m.currency) in ((7, "GBP"), (0, "CHF")),
    )


def test_explicit_creators():
    arbitrary = for_type(Point).use(positional_point)
    assert arbitrary.creators() == [positional_point]
    assert_all_generated(arbitrary.generator(), Random(0), lambda p: p.x == p.y)


def test_parameters_with_defaults_and_no_annotation_are_left_alone():
    arbitrary = for_type(Money).use_public_constructors()
    assert generate_first(arbitrary, Random(0)).currency == "EUR"


def test_abstract_classes_have_no_creators():
    with pytest.raises(NoCreatorsFound):
        for_type(Shape).generator()


def test_filters_can_exclude_every_creator():
    arbitrary = for_type(Point).use_constructors(lambda c: False)
    assert arbitrary.creators() == []
    with pytest.raises(NoCreatorsFound):
        arbitrary.generator()


def test_unresolvable_parameter_types():
    class Wrapper:
        def __init__(self, value: complex):
            self.value = value

    with pytest.raises(CannotFindArbitrary) as err:
        for_type(Wrapper).generator()
    assert err.value.parameter_type is complex


def test_parameters_without_annotation_or_default():
    class Untyped:
        def __init__(self, value):
            self.value = value

    with pytest.raises(CannotFindArbitrary):
        for_type(Untyped).generator()


def test_resolving_parameters_can_be_injected():
    arbitrary = for_type(Point, resolve_parameter=lambda t: [just(3)])
    assert_all_generated(arbitrary.generator(), Random(0), lambda p: p == Point(3, 3))


def test_several_resolved_arbitraries_are_alternatives():
    arbitrary = for_type(Point, resolve_parameter=lambda t: [just(1), just(2)])
    generator = arbitrary.generator()
    assert_all_generated(generator, Random(0), lambda p: {p.x, p.y} <= {1, 2})
    assert_at_least_one_generated(generator, Random(0), lambda p: p.x == 1)
    assert_at_least_one_generated(generator, Random(0), lambda p: p.x == 2)


def test_finding_creators_can_be_injected():
    calls = []

    def find_creators(target, constructor_filters, factory_filters):
        calls.append(target)
        return [lambda: Point(1, 2)]

    arbitrary = for_type(Point, find_creators=find_creators)
    assert generate_first(arbitrary, Random(0)) == Point(1, 2)
    assert calls == [Point]


def test_registered_types_resolve_parameters(registered_points):
    arbitrary = for_type(Segment)

    def check(segment):
        for p in (segment.start, segment.end):
            assert isinstance(p, Point)
            assert 0 <= p.x <= 3

    assert_all_generated(arbitrary.generator(), Random(0), check)


def test_exhaustive_generation_when_every_parameter_allows_it():
    exhaustive = for_type(Flag).exhaustive()
    assert exhaustive.max_count == 2
    assert list(exhaustive) == [Flag(False), Flag(True)]
    assert for_type(Point).exhaustive() is None


def test_edge_cases_combine_parameter_edge_cases():
    arbitrary = for_type(Point, resolve_parameter=lambda t: [of(0, 1)])
    assert collect_edge_case_values(arbitrary.edge_cases()) == [
        Point(0, 0),
        Point(0, 1),
        Point(1, 0),
        Point(1, 1),
    ]


def test_shrinks_through_the_creator():
    arbitrary = for_type(Point).use_public_constructors()
    assert minimal(arbitrary, lambda p: p.x >= 3) == Point(3, 0)


def test_same_random_gives_equal_values():
    arbitrary = for_type(Point)
    assert generate_first(arbitrary, Random(5)) == generate_first(arbitrary, Random(5))


def test_invalid_arguments():
    with pytest.raises(InvalidArgument):
        for_type(42)
    with pytest.raises(InvalidArgument):
        for_type(Point, find_creators=1)
    with pytest.raises(InvalidArgument):
        for_type(Point).use(1)
    with pytest.raises(InvalidArgument):
        register_type_arbitrary(1, integers)


def test_repr():
    assert repr(for_type(Point)) == "for_type(Point)"


def test_can_be_shared_between_threads_while_resolving():
    def slow_find_creators(target, constructor_filters, factory_filters):
        time.sleep(0.3)
        return [target]

    arbitrary = for_type(Point, find_creators=slow_find_creators)
    errors = []
    values = []

    def generate(delay):
        time.sleep(delay)
        try:
            values.append(arbitrary.generator(10).next(Random(0)).value())
        except Exception as err:
            errors.append(err)

    threads = [threading.Thread(target=generate, args=(d,)) for d in (0, 0.1)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
    assert len(values) == 2
    assert values[0] == values[1]


def test_configured_copies_resolve_their_own_creators():
    arbitrary = for_type(Money)
    assert generate_first(arbitrary, Random(0)) is not None
    constructed = arbitrary.use_public_constructors()
    assert_all_generated(
        constructed.generator(), Random(0), lambda m: m.currency == "EUR"
    )
