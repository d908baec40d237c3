# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from arbitraries._settings import settings
from arbitraries.errors import TooManyFilterMisses
from arbitraries.internal.hashing import HashItAnyway
from arbitraries.internal.reflection import get_pretty_function_description
from arbitraries.shrinking.shrinkables import FlatMappedShrinkable


class RandomGenerator:
    """Produces one shrinkable per call to :meth:`next`.

    All randomness comes from the ``random.Random`` instance passed in, so
    a generator fed identically seeded randoms produces equal values.
    """

    def __init__(self, draw, description=None):
        self.draw = draw
        self.description = description

    def next(self, random):
        return self.draw(random)

    def __repr__(self):
        if self.description is not None:
            return f"RandomGenerator({self.description})"
        return f"RandomGenerator({get_pretty_function_description(self.draw)})"

    def map(self, mapper):
        return RandomGenerator(lambda random: self.next(random).map(mapper))

    def filter(self, condition, max_misses=None):
        if max_misses is None:
            max_misses = settings.default.max_filter_misses

        def draw(random):
            for _ in range(max_misses):
                shrinkable = self.next(random)
                if condition(shrinkable.value()):
                    return shrinkable.filter(condition)
            raise TooManyFilterMisses(
                f"{max_misses} values in a row did not satisfy "
                f"{get_pretty_function_description(condition)}"
            )

        return RandomGenerator(draw)

    def flat_map(self, mapper, size):
        def draw(random):
            return FlatMappedShrinkable(
                self.next(random), mapper, size, random.getrandbits(64)
            )

        return RandomGenerator(draw)

    def unique(self, max_misses=None):
        """A generator that never produces a value it has produced before.

        The record of produced values belongs to the returned generator, so
        every call to ``Arbitrary.generator()`` starts a fresh one.
        """
        if max_misses is None:
            max_misses = settings.default.max_filter_misses
        seen = set()

        def not_seen(value):
            return HashItAnyway(value) not in seen

        def draw(random):
            for _ in range(max_misses):
                shrinkable = self.next(random)
                key = HashItAnyway(shrinkable.value())
                if key not in seen:
                    seen.add(key)
                    return shrinkable.filter(not_seen)
            raise TooManyFilterMisses(
                f"Could not find a value not generated before after "
                f"{max_misses} attempts"
            )

        return RandomGenerator(draw)

    def dont_shrink(self):
        return RandomGenerator(lambda random: self.next(random).make_unshrinkable())

    def with_edge_cases(self, size, edge_cases):
        """Mix ``edge_cases`` into this generator's values.

        The smaller the size, the more often an edge case is chosen, but with
        many edge cases each one individually gets rarer.
        """
        edge_cases = list(edge_cases)
        if not edge_cases:
            return self
        ratio = min(max(round(size / 5), 1), max(100 // len(edge_cases), 1)) + 1

        def draw(random):
            if random.randrange(ratio) == 0:
                return edge_cases[random.randrange(len(edge_cases))]
            return self.next(random)

        return RandomGenerator(draw)
