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
from typing import Any, Callable, Optional

from arbitraries._settings import settings
from arbitraries.generation._internal.edge_cases import EdgeCases
from arbitraries.generation._internal.exhaustive import ExhaustiveGenerator
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.internal.reflection import get_pretty_function_description
from arbitraries.internal.utils import biased_coin
from arbitraries.internal.validation import (
    check_callable,
    check_positive_size,
    check_valid_probability,
    check_valid_size,
)
from arbitraries.shrinking.shrinkables import FlatMappedShrinkable, OptionalShrinkable


class Arbitrary:
    """A specification of how to produce values.

    An arbitrary is never itself a source of values: it hands out random
    generators for a size hint, a finite set of edge cases, and, for small
    domains, an exhaustive generator.  Arbitraries hold no mutable state
    that affects the values they describe, and every method that configures
    them returns a new arbitrary, so they can be shared freely.

    Subclasses implement :meth:`do_generator`, and optionally
    :meth:`do_edge_cases`, :meth:`do_exhaustive` and :meth:`do_validate`.
    """

    validate_called = False

    def validate(self):
        """Throw an exception if the arbitrary is not valid.

        This can happen due to lazy construction.
        """
        if self.validate_called:
            return
        try:
            self.validate_called = True
            self.do_validate()
        except Exception:
            self.validate_called = False
            raise

    def do_validate(self):
        pass

    def generator(self, size: Optional[int] = None) -> RandomGenerator:
        """A :class:`RandomGenerator` of shrinkables for the size hint
        ``size``, which defaults to ``settings.generation_size``."""
        self.validate()
        if size is None:
            size = settings.default.generation_size
        check_positive_size(size, "size")
        return self.do_generator(size)

    def do_generator(self, size):
        raise NotImplementedError(f"{type(self).__name__}.do_generator")

    def generator_with_embedded_edge_cases(
        self, size: Optional[int] = None
    ) -> RandomGenerator:
        """Like :meth:`generator`, but now and then produces an edge case
        instead of a random value."""
        generator = self.generator(size)
        if size is None:
            size = settings.default.generation_size
        return generator.with_edge_cases(size, self.edge_cases())

    def edge_cases(self, max_edge_cases: Optional[int] = None) -> EdgeCases:
        """At most ``max_edge_cases`` distinct boundary values, as
        shrinkables.  Iterating the result twice yields the same values."""
        self.validate()
        if max_edge_cases is None:
            max_edge_cases = settings.default.max_edge_cases
        check_valid_size(max_edge_cases, "max_edge_cases")
        return EdgeCases(lambda: self.do_edge_cases(max_edge_cases), max_edge_cases)

    def do_edge_cases(self, max_edge_cases):
        return iter(())

    def exhaustive(
        self, max_number_of_samples: Optional[int] = None
    ) -> Optional[ExhaustiveGenerator]:
        """An :class:`ExhaustiveGenerator` over every value, or None if there
        are more than ``max_number_of_samples`` of them (by default
        ``settings.max_exhaustive_count``) or they cannot be enumerated."""
        self.validate()
        if max_number_of_samples is None:
            max_number_of_samples = settings.default.max_exhaustive_count
        check_positive_size(max_number_of_samples, "max_number_of_samples")
        return self.do_exhaustive(max_number_of_samples)

    def do_exhaustive(self, ceiling):
        return None

    def example(self, random: Optional[Random] = None) -> Any:
        """A single random value, for interactive exploration."""
        if random is None:
            random = Random()
        return self.generator().next(random).value()

    def map(self, mapper: Callable[[Any], Any]) -> "Arbitrary":
        check_callable(mapper, "mapper")
        return MappedArbitrary(self, mapper)

    def filter(self, condition: Callable[[Any], bool]) -> "Arbitrary":
        check_callable(condition, "condition")
        return FilteredArbitrary(self, condition)

    def flat_map(self, mapper: Callable[[Any], "Arbitrary"]) -> "Arbitrary":
        check_callable(mapper, "mapper")
        return FlatMappedArbitrary(self, mapper)

    def unique(self) -> "Arbitrary":
        return UniqueArbitrary(self)

    def dont_shrink(self) -> "Arbitrary":
        return UnshrinkableArbitrary(self)

    def optional(self, probability: float = 0.05) -> "Arbitrary":
        """Produce None with ``probability`` instead of a value."""
        check_valid_probability(probability, "probability")
        return OptionalArbitrary(self, probability)


class MappedArbitrary(Arbitrary):
    def __init__(self, source, mapper):
        self.source = source
        self.mapper = mapper

    def __repr__(self):
        return f"{self.source!r}.map({get_pretty_function_description(self.mapper)})"

    def do_validate(self):
        self.source.validate()

    def do_generator(self, size):
        return self.source.generator(size).map(self.mapper)

    def do_edge_cases(self, max_edge_cases):
        return iter(self.source.edge_cases(max_edge_cases).map(self.mapper))

    def do_exhaustive(self, ceiling):
        exhaustive = self.source.exhaustive(ceiling)
        if exhaustive is None:
            return None
        return exhaustive.map(self.mapper, ceiling)


class FilteredArbitrary(Arbitrary):
    def __init__(self, source, condition):
        self.source = source
        self.condition = condition

    def __repr__(self):
        return (
            f"{self.source!r}.filter({get_pretty_function_description(self.condition)})"
        )

    def do_validate(self):
        self.source.validate()

    def do_generator(self, size):
        return self.source.generator(size).filter(self.condition)

    def do_edge_cases(self, max_edge_cases):
        return iter(self.source.edge_cases(max_edge_cases).filter(self.condition))

    def do_exhaustive(self, ceiling):
        exhaustive = self.source.exhaustive(ceiling)
        if exhaustive is None:
            return None
        return exhaustive.filter(self.condition, ceiling)


class FlatMappedArbitrary(Arbitrary):
    """Values from the arbitrary that ``mapper`` returns for a value of
    ``source``."""

    def __init__(self, source, mapper):
        self.source = source
        self.mapper = mapper

    def __repr__(self):
        return (
            f"{self.source!r}.flat_map({get_pretty_function_description(self.mapper)})"
        )

    def do_validate(self):
        self.source.validate()

    def do_generator(self, size):
        return self.source.generator(size).flat_map(self.mapper, size)

    def do_edge_cases(self, max_edge_cases):
        size = settings.default.generation_size
        for outer in self.source.edge_cases(max_edge_cases):
            for inner in self.mapper(outer.value()).edge_cases(max_edge_cases):
                yield FlatMappedShrinkable(outer, self.mapper, size, 0, inner=inner)

    def do_exhaustive(self, ceiling):
        outer = self.source.exhaustive(ceiling)
        if outer is None:
            return None
        inners = []
        for value in outer:
            inner = self.mapper(value).exhaustive(ceiling)
            if inner is None:
                return None
            inners.append(inner)

        def values():
            for inner in inners:
                yield from inner

        return ExhaustiveGenerator.counted(values, ceiling)


class UniqueArbitrary(Arbitrary):
    """Values that the same generator has not produced before."""

    def __init__(self, source):
        self.source = source

    def __repr__(self):
        return f"{self.source!r}.unique()"

    def do_validate(self):
        self.source.validate()

    def do_generator(self, size):
        return self.source.generator(size).unique()

    def do_edge_cases(self, max_edge_cases):
        return iter(self.source.edge_cases(max_edge_cases))

    def do_exhaustive(self, ceiling):
        return self.source.exhaustive(ceiling)


class UnshrinkableArbitrary(Arbitrary):
    def __init__(self, source):
        self.source = source

    def __repr__(self):
        return f"{self.source!r}.dont_shrink()"

    def do_validate(self):
        self.source.validate()

    def do_generator(self, size):
        return self.source.generator(size).dont_shrink()

    def do_edge_cases(self, max_edge_cases):
        for edge_case in self.source.edge_cases(max_edge_cases):
            yield edge_case.make_unshrinkable()

    def do_exhaustive(self, ceiling):
        return self.source.exhaustive(ceiling)


class OptionalArbitrary(Arbitrary):
    def __init__(self, source, probability):
        self.source = source
        self.probability = probability

    def __repr__(self):
        return f"{self.source!r}.optional({self.probability!r})"

    def do_validate(self):
        self.source.validate()

    def do_generator(self, size):
        generator = self.source.generator(size)

        def draw(random):
            if biased_coin(random, self.probability):
                return OptionalShrinkable(None)
            return OptionalShrinkable(generator.next(random))

        return RandomGenerator(draw)

    def do_edge_cases(self, max_edge_cases):
        if self.probability > 0:
            yield OptionalShrinkable(None)
        if self.probability < 1:
            for edge_case in self.source.edge_cases(max_edge_cases):
                yield OptionalShrinkable(edge_case)

    def do_exhaustive(self, ceiling):
        if self.probability >= 1:
            return ExhaustiveGenerator.of_values([None], ceiling)
        exhaustive = self.source.exhaustive(ceiling)
        if exhaustive is None or self.probability <= 0:
            return exhaustive

        def values():
            yield None
            yield from exhaustive

        return ExhaustiveGenerator.counted(values, ceiling)
