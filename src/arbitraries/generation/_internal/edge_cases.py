# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from itertools import islice

from arbitraries.internal.hashing import unique_by_value


def _value_of(shrinkable):
    return shrinkable.value()


class EdgeCases:
    """A finite, restartable collection of edge case shrinkables.

    ``supplier`` is called afresh every time the edge cases are iterated, so
    iterating twice yields equal values without sharing any of them.
    Shrinkables producing equal values are only yielded once, and at most
    ``limit`` are yielded in total.
    """

    def __init__(self, supplier, limit=None):
        self.supplier = supplier
        self.limit = limit

    def __iter__(self):
        unique = unique_by_value(self.supplier(), key=_value_of)
        if self.limit is None:
            return unique
        return islice(unique, self.limit)

    def __len__(self):
        return sum(1 for _ in self)

    def __bool__(self):
        return any(True for _ in self)

    def values(self):
        return [e.value() for e in self]

    def map(self, mapper):
        return EdgeCases(lambda: (e.map(mapper) for e in self), self.limit)

    def filter(self, condition):
        return EdgeCases(
            lambda: (e.filter(condition) for e in self if condition(e.value())),
            self.limit,
        )

    def __repr__(self):
        return f"EdgeCases({self.values()!r})"
