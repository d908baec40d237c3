# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import attr

from arbitraries.generation._internal.core import Arbitrary
from arbitraries.generation._internal.exhaustive import (
    ExhaustiveGenerator,
    exhaustive_product,
)
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.internal.utils import sqrt_size
from arbitraries.internal.validation import check_arbitrary, check_valid_sizes
from arbitraries.shrinking.shrinkables import ShrinkableList


@attr.s(repr=False, eq=False)
class ListArbitrary(Arbitrary):
    """Lists of independently drawn elements with a length in
    ``[min_size, max_size]``.

    Without a ``max_size`` the longest list is ``min_size`` plus a length
    that grows with the square root of the size hint.
    """

    elements = attr.ib()
    min_size = attr.ib(default=0)
    max_size = attr.ib(default=None)

    def __repr__(self):
        return (
            f"lists({self.elements!r}).of_min_size({self.min_size!r})"
            f".of_max_size({self.max_size!r})"
        )

    def of_min_size(self, min_size):
        check_valid_sizes(min_size, self.max_size)
        return attr.evolve(self, min_size=min_size)

    def of_max_size(self, max_size):
        check_valid_sizes(self.min_size, max_size)
        return attr.evolve(self, max_size=max_size)

    def of_size(self, size):
        check_valid_sizes(size, size)
        return attr.evolve(self, min_size=size, max_size=size)

    def do_validate(self):
        self.elements.validate()

    def do_generator(self, size):
        elements = self.elements.generator(size)
        if self.max_size is not None:
            max_size = self.max_size
        else:
            max_size = self.min_size + sqrt_size(size, 10)

        def draw(random):
            length = random.randint(self.min_size, max_size)
            return ShrinkableList(
                [elements.next(random) for _ in range(length)], self.min_size
            )

        return RandomGenerator(draw, description=repr(self))

    def do_edge_cases(self, max_edge_cases):
        if self.min_size == 0:
            yield ShrinkableList([], 0)
        if self.max_size == 0:
            return
        length = max(self.min_size, 1)
        for element in self.elements.edge_cases(max_edge_cases):
            yield ShrinkableList([element] * length, self.min_size)

    def do_exhaustive(self, ceiling):
        if self.max_size is None:
            return None
        elements = self.elements.exhaustive(ceiling)
        if elements is None:
            return None
        by_size = []
        for length in range(self.min_size, self.max_size + 1):
            exhaustive = exhaustive_product([elements] * length, list, ceiling)
            if exhaustive is None:
                return None
            by_size.append(exhaustive)

        def values():
            for exhaustive in by_size:
                yield from exhaustive

        return ExhaustiveGenerator.counted(values, ceiling)


def lists(elements: Arbitrary) -> ListArbitrary:
    check_arbitrary(elements, "elements")
    return ListArbitrary(elements)
