# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from functools import total_ordering
from itertools import zip_longest

import attr

from arbitraries.errors import InvalidArgument


def _check_dimensions(instance, attribute, value):
    for d in value:
        if isinstance(d, bool) or not isinstance(d, int) or d < 0:
            raise InvalidArgument(
                f"Shrinking distance dimensions must be non-negative integers, "
                f"but got {value!r}"
            )


@total_ordering
@attr.s(frozen=True, slots=True, repr=False, order=False)
class ShrinkingDistance:
    """How complex a generated value is, as one non-negative integer per
    independent dimension of its generation (e.g. magnitude, length).

    Distances are ordered by the sum over all dimensions first, and by the
    dimensions themselves lexicographically when the sums tie.  The all-zero
    distance belongs to values that cannot get any simpler.
    """

    dimensions = attr.ib(converter=tuple, validator=_check_dimensions)

    @classmethod
    def of(cls, *dimensions):
        return cls(dimensions)

    @classmethod
    def for_collection(cls, elements):
        """Distance of a collection: its size, then the summed complexity of
        its elements."""
        elements = list(elements)
        return cls.of(len(elements), sum(e.distance().size() for e in elements))

    @classmethod
    def combine(cls, distances):
        result = cls.MIN
        for d in distances:
            result = result.append(d)
        return result

    def size(self):
        return sum(self.dimensions)

    def is_minimal(self):
        return self.size() == 0

    def plus(self, other):
        """Pointwise sum, for distances along the same dimensions."""
        return ShrinkingDistance(
            a + b for a, b in zip_longest(self.dimensions, other.dimensions, fillvalue=0)
        )

    def append(self, other):
        """Concatenation, for distances of structurally independent parts."""
        return ShrinkingDistance(self.dimensions + other.dimensions)

    def sort_key(self):
        return (self.size(), self.dimensions)

    def __lt__(self, other):
        if not isinstance(other, ShrinkingDistance):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __repr__(self):
        return "ShrinkingDistance({})".format(
            ", ".join(map(str, self.dimensions))
        )


ShrinkingDistance.MIN = ShrinkingDistance(())
