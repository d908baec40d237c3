# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from itertools import product
from typing import Any, Callable, Tuple

from arbitraries.errors import InvalidArgument
from arbitraries.generation._internal.core import Arbitrary
from arbitraries.generation._internal.exhaustive import (
    ExhaustiveGenerator,
    exhaustive_product,
)
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.internal.reflection import get_pretty_function_description
from arbitraries.internal.utils import Sampler, check_sample
from arbitraries.internal.validation import (
    check_arbitrary,
    check_callable,
    check_type,
)
from arbitraries.shrinking.shrinkables import (
    CombinedShrinkable,
    ShrinkableChoice,
    Unshrinkable,
    unshrinkable,
)


class JustArbitrary(Arbitrary):
    """Always the same value, which cannot shrink."""

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"just({self.value!r})"

    def do_generator(self, size):
        shrinkable = unshrinkable(self.value)
        return RandomGenerator(lambda random: shrinkable, description=repr(self))

    def do_edge_cases(self, max_edge_cases):
        yield unshrinkable(self.value)

    def do_exhaustive(self, ceiling):
        return ExhaustiveGenerator.of_values([self.value], ceiling)


class SampledArbitrary(Arbitrary):
    """One of a fixed sequence of values, shrinking towards earlier ones."""

    def __init__(self, values):
        self.values = values

    def __repr__(self):
        return "of({})".format(", ".join(map(repr, self.values)))

    def do_generator(self, size):
        n = len(self.values)
        return RandomGenerator(
            lambda random: ShrinkableChoice(self.values, random.randrange(n)),
            description=repr(self),
        )

    def do_edge_cases(self, max_edge_cases):
        yield ShrinkableChoice(self.values, 0)
        yield ShrinkableChoice(self.values, len(self.values) - 1)

    def do_exhaustive(self, ceiling):
        return ExhaustiveGenerator.of_values(self.values, ceiling)


class CreateArbitrary(Arbitrary):
    """A fresh value from ``supplier`` every time one is asked for."""

    def __init__(self, supplier):
        self.supplier = supplier

    def __repr__(self):
        return f"create({get_pretty_function_description(self.supplier)})"

    def do_generator(self, size):
        shrinkable = Unshrinkable(self.supplier)
        return RandomGenerator(lambda random: shrinkable, description=repr(self))

    def do_edge_cases(self, max_edge_cases):
        yield Unshrinkable(self.supplier)

    def do_exhaustive(self, ceiling):
        return ExhaustiveGenerator(1, lambda: iter((self.supplier(),)))


class FrequencyArbitrary(Arbitrary):
    """Values of one of several arbitraries, chosen with probability
    proportional to its weight.  Alternatives with weight zero are never
    used, not even for edge cases."""

    def __init__(self, weighted):
        self.weighted = weighted
        self.alternatives = [a for w, a in weighted if w > 0]

    def __repr__(self):
        return "frequency_of({})".format(
            ", ".join(f"({w!r}, {a!r})" for w, a in self.weighted)
        )

    def do_validate(self):
        for _, alternative in self.weighted:
            alternative.validate()

    def do_generator(self, size):
        sampler = Sampler([w for w, _ in self.weighted])
        generators = [a.generator(size) for _, a in self.weighted]
        return RandomGenerator(
            lambda random: generators[sampler.sample(random)].next(random),
            description=repr(self),
        )

    def do_edge_cases(self, max_edge_cases):
        for alternative in self.alternatives:
            yield from alternative.edge_cases(max_edge_cases)

    def do_exhaustive(self, ceiling):
        exhaustives = []
        for alternative in self.alternatives:
            exhaustive = alternative.exhaustive(ceiling)
            if exhaustive is None:
                return None
            exhaustives.append(exhaustive)

        def values():
            for exhaustive in exhaustives:
                yield from exhaustive

        return ExhaustiveGenerator.counted(values, ceiling)


class OneOfArbitrary(FrequencyArbitrary):
    def __init__(self, alternatives):
        super().__init__([(1, a) for a in alternatives])

    def __repr__(self):
        return "one_of({})".format(", ".join(map(repr, self.alternatives)))


class CombinedArbitrary(Arbitrary):
    """One value from each of several arbitraries, passed to a combinator.

    Parts shrink independently, and edge cases and exhaustive values are
    cartesian products with the first part varying slowest.
    """

    def __init__(self, parts, combinator):
        self.parts = parts
        self.combinator = combinator

    def __repr__(self):
        return "combine({}).as_({})".format(
            ", ".join(map(repr, self.parts)),
            get_pretty_function_description(self.combinator),
        )

    def _combine(self, values):
        return self.combinator(*values)

    def do_validate(self):
        for part in self.parts:
            part.validate()

    def do_generator(self, size):
        generators = [p.generator(size) for p in self.parts]

        def draw(random):
            return CombinedShrinkable(
                [g.next(random) for g in generators], self._combine
            )

        return RandomGenerator(draw, description=repr(self))

    def do_edge_cases(self, max_edge_cases):
        edge_cases = [list(p.edge_cases(max_edge_cases)) for p in self.parts]
        for parts in product(*edge_cases):
            yield CombinedShrinkable(parts, self._combine)

    def do_exhaustive(self, ceiling):
        return exhaustive_product(
            [p.exhaustive(ceiling) for p in self.parts], self._combine, ceiling
        )


class Combinator:
    """The result of :func:`combine`, waiting for a function to combine
    values with."""

    def __init__(self, parts):
        self.parts = parts

    def __repr__(self):
        return "combine({})".format(", ".join(map(repr, self.parts)))

    def as_(self, combinator):
        check_callable(combinator, "combinator")
        return CombinedArbitrary(self.parts, combinator)


def just(value: Any) -> Arbitrary:
    return JustArbitrary(value)


def of(*values: Any) -> Arbitrary:
    """One of ``values``, shrinking towards the first one.  The first and
    last values are the edge cases."""
    return SampledArbitrary(check_sample(values, "values"))


def create(supplier: Callable[[], Any]) -> Arbitrary:
    check_callable(supplier, "supplier")
    return CreateArbitrary(supplier)


def one_of(*alternatives: Arbitrary) -> Arbitrary:
    check_sample(alternatives, "alternatives")
    for i, a in enumerate(alternatives):
        check_arbitrary(a, f"alternatives[{i}]")
    return OneOfArbitrary(alternatives)


def frequency_of(*weighted: Tuple[int, Arbitrary]) -> Arbitrary:
    """Values from one of several ``(weight, arbitrary)`` pairs, chosen in
    proportion to their non-negative weights."""
    check_sample(weighted, "weighted")
    for i, pair in enumerate(weighted):
        check_type(tuple, pair, f"weighted[{i}]")
        weight, alternative = pair
        check_type(int, weight, f"weighted[{i}][0]")
        if isinstance(weight, bool) or weight < 0:
            raise InvalidArgument(
                f"Weights must be non-negative integers, but got weighted[{i}][0]="
                f"{weight!r}"
            )
        check_arbitrary(alternative, f"weighted[{i}][1]")
    # Fails fast if no weight is positive.
    Sampler([w for w, _ in weighted])
    return FrequencyArbitrary(weighted)


def combine(*parts: Arbitrary) -> Combinator:
    for i, part in enumerate(parts):
        check_arbitrary(part, f"parts[{i}]")
    return Combinator(parts)
