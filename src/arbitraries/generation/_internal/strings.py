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

from arbitraries.errors import InvalidArgument
from arbitraries.generation._internal.core import Arbitrary
from arbitraries.generation._internal.exhaustive import (
    ExhaustiveGenerator,
    exhaustive_product,
)
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.internal.utils import sqrt_size
from arbitraries.internal.validation import check_type, check_valid_sizes
from arbitraries.shrinking.shrinkables import ShrinkableInteger, ShrinkableList

# Every code point except the surrogates, which cannot appear in valid text.
DEFAULT_RANGES = ((0x0000, 0xD7FF), (0xE000, 0x10FFFF))


def _check_char(value, name):
    check_type(str, value, name)
    if len(value) != 1:
        raise InvalidArgument(f"Expected a single character but got {name}={value!r}")


def _join(chars):
    return "".join(chars)


@attr.s(repr=False, eq=False)
class CharacterArbitrary(Arbitrary):
    """Single characters drawn from a union of code point ranges.

    Characters shrink towards the start of the first range.  The first
    ``with_*`` call replaces the default of all non-surrogate code points.
    """

    ranges = attr.ib(default=None, converter=attr.converters.optional(tuple))

    def __repr__(self):
        return f"characters().with_ranges({self.effective_ranges!r})"

    @property
    def effective_ranges(self):
        if self.ranges is None:
            return DEFAULT_RANGES
        return self.ranges

    def _adding(self, *ranges):
        return attr.evolve(self, ranges=(self.ranges or ()) + ranges)

    def with_char_range(self, min_char, max_char):
        _check_char(min_char, "min_char")
        _check_char(max_char, "max_char")
        if max_char < min_char:
            raise InvalidArgument(
                f"Cannot have max_char={max_char!r} < min_char={min_char!r}"
            )
        return self._adding((ord(min_char), ord(max_char)))

    def with_chars(self, *chars):
        for c in chars:
            _check_char(c, "chars")
        return self._adding(*((ord(c), ord(c)) for c in chars))

    def alpha(self):
        return self.with_char_range("a", "z").with_char_range("A", "Z")

    def numeric(self):
        return self.with_char_range("0", "9")

    def do_validate(self):
        if self.ranges is not None and not self.ranges:
            raise InvalidArgument("Cannot generate characters from no characters")

    @property
    def count(self):
        return sum(hi - lo + 1 for lo, hi in self.effective_ranges)

    def char_at(self, index):
        for lo, hi in self.effective_ranges:
            if index <= hi - lo:
                return chr(lo + index)
            index -= hi - lo + 1
        raise IndexError(index)

    def shrinkable_at(self, index):
        return ShrinkableInteger(index, 0, self.count - 1, 0).map(self.char_at)

    def do_generator(self, size):
        count = self.count
        return RandomGenerator(
            lambda random: self.shrinkable_at(random.randrange(count)),
            description=repr(self),
        )

    def do_edge_cases(self, max_edge_cases):
        # The first and last character of every range.
        offset = 0
        for lo, hi in self.effective_ranges:
            yield self.shrinkable_at(offset)
            offset += hi - lo + 1
            yield self.shrinkable_at(offset - 1)

    def do_exhaustive(self, ceiling):
        if self.count > ceiling:
            return None
        return ExhaustiveGenerator.counted(
            lambda: map(self.char_at, range(self.count)), ceiling
        )


def characters() -> CharacterArbitrary:
    return CharacterArbitrary()


@attr.s(repr=False, eq=False)
class StringArbitrary(Arbitrary):
    chars = attr.ib(factory=CharacterArbitrary)
    min_length = attr.ib(default=0)
    max_length = attr.ib(default=None)

    def __repr__(self):
        return (
            f"strings().with_ranges({self.chars.effective_ranges!r})"
            f".of_min_length({self.min_length!r}).of_max_length({self.max_length!r})"
        )

    def with_char_range(self, min_char, max_char):
        return attr.evolve(self, chars=self.chars.with_char_range(min_char, max_char))

    def with_chars(self, *chars):
        return attr.evolve(self, chars=self.chars.with_chars(*chars))

    def alpha(self):
        return attr.evolve(self, chars=self.chars.alpha())

    def numeric(self):
        return attr.evolve(self, chars=self.chars.numeric())

    def of_min_length(self, min_length):
        check_valid_sizes(min_length, self.max_length)
        return attr.evolve(self, min_length=min_length)

    def of_max_length(self, max_length):
        check_valid_sizes(self.min_length, max_length)
        return attr.evolve(self, max_length=max_length)

    def of_length(self, length):
        check_valid_sizes(length, length)
        return attr.evolve(self, min_length=length, max_length=length)

    def do_validate(self):
        self.chars.validate()

    def effective_max_length(self, size):
        if self.max_length is not None:
            return self.max_length
        return self.min_length + sqrt_size(size, 10)

    def do_generator(self, size):
        chars = self.chars.generator(size)
        max_length = self.effective_max_length(size)

        def draw(random):
            length = random.randint(self.min_length, max_length)
            elements = [chars.next(random) for _ in range(length)]
            return ShrinkableList(elements, self.min_length).map(_join)

        return RandomGenerator(draw, description=repr(self))

    def do_edge_cases(self, max_edge_cases):
        for c in self.chars.edge_cases(max_edge_cases):
            yield ShrinkableList([c] * self.min_length, self.min_length).map(_join)

    def do_exhaustive(self, ceiling):
        if self.max_length is None:
            return None
        chars = self.chars.exhaustive(ceiling)
        if chars is None:
            return None
        by_length = []
        for length in range(self.min_length, self.max_length + 1):
            exhaustive = exhaustive_product([chars] * length, _join, ceiling)
            if exhaustive is None:
                return None
            by_length.append(exhaustive)

        def values():
            for exhaustive in by_length:
                yield from exhaustive

        return ExhaustiveGenerator.counted(values, ceiling)


def strings() -> StringArbitrary:
    return StringArbitrary()
