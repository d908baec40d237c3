# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import math
from itertools import islice, product

from arbitraries.internal.hashing import unique_by_value


class ExhaustiveGenerator:
    """Every value of a small domain, each exactly once, in a stable order.

    ``values`` is a zero-argument function returning a fresh iterator over
    the domain, so that the generator can be iterated any number of times.
    ``max_count`` is the exact number of values it yields.
    """

    def __init__(self, max_count, values):
        self.max_count = max_count
        self._values = values

    @classmethod
    def counted(cls, values, ceiling):
        """An exhaustive generator over the distinct values produced by
        ``values``, or None if there are more than ``ceiling`` of them."""

        def distinct():
            return unique_by_value(values())

        count = sum(1 for _ in islice(distinct(), ceiling + 1))
        if count > ceiling:
            return None
        return cls(count, distinct)

    @classmethod
    def of_values(cls, values, ceiling):
        values = tuple(values)
        return cls.counted(lambda: iter(values), ceiling)

    def __iter__(self):
        return iter(self._values())

    def __len__(self):
        return self.max_count

    def nth(self, index):
        """The value at ``index``, freshly produced."""
        return next(islice(self._values(), index, None))

    def map(self, mapper, ceiling):
        return ExhaustiveGenerator.counted(lambda: map(mapper, self), ceiling)

    def filter(self, condition, ceiling):
        return ExhaustiveGenerator.counted(lambda: filter(condition, self), ceiling)

    def __repr__(self):
        return f"ExhaustiveGenerator(max_count={self.max_count})"


def exhaustive_product(generators, combinator, ceiling):
    """The cartesian product of ``generators`` passed through ``combinator``,
    which receives a list with one value from each.

    Earlier generators vary slowest.  Each combination gets freshly produced
    values, so a combinator that mutates its inputs cannot affect later
    combinations.  Returns None if any generator is None or the product is
    larger than ``ceiling``.
    """
    generators = list(generators)
    if any(g is None for g in generators):
        return None
    if math.prod(g.max_count for g in generators) > ceiling:
        return None

    def values():
        for indices in product(*(range(g.max_count) for g in generators)):
            yield combinator([g.nth(i) for g, i in zip(generators, indices)])

    return ExhaustiveGenerator.counted(values, ceiling)
