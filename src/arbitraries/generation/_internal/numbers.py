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
from arbitraries.generation._internal.exhaustive import ExhaustiveGenerator
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.internal.utils import biased_coin
from arbitraries.internal.validation import check_valid_integer, check_valid_interval
from arbitraries.shrinking.shrinkables import ShrinkableInteger

DEFAULT_MIN_VALUE = -(2**31)
DEFAULT_MAX_VALUE = 2**31 - 1


def _clamp(lower, value, upper):
    return max(lower, min(value, upper))


@attr.s(repr=False, eq=False)
class IntegerArbitrary(Arbitrary):
    """Integers in a closed range, shrinking towards a target.

    Without explicit bounds the range is that of a signed 32 bit integer.
    Without an explicit target, values shrink towards the point of the range
    closest to zero.
    """

    min_value = attr.ib(default=DEFAULT_MIN_VALUE)
    max_value = attr.ib(default=DEFAULT_MAX_VALUE)
    target = attr.ib(default=None)

    def __repr__(self):
        result = f"integers().between({self.min_value!r}, {self.max_value!r})"
        if self.target is not None:
            result += f".shrink_towards({self.target!r})"
        return result

    def between(self, min_value, max_value):
        check_valid_integer(min_value, "min_value")
        check_valid_integer(max_value, "max_value")
        check_valid_interval(min_value, max_value, "min_value", "max_value")
        return attr.evolve(
            self,
            min_value=DEFAULT_MIN_VALUE if min_value is None else min_value,
            max_value=DEFAULT_MAX_VALUE if max_value is None else max_value,
        )

    def greater_or_equal(self, min_value):
        return self.between(min_value, self.max_value)

    def less_or_equal(self, max_value):
        return self.between(self.min_value, max_value)

    def shrink_towards(self, target):
        check_valid_integer(target, "target")
        return attr.evolve(self, target=target)

    def do_validate(self):
        check_valid_interval(self.min_value, self.max_value, "min_value", "max_value")
        if self.target is not None and not (
            self.min_value <= self.target <= self.max_value
        ):
            raise InvalidArgument(
                f"Cannot shrink towards target={self.target!r} outside of "
                f"[{self.min_value!r}, {self.max_value!r}]"
            )

    @property
    def effective_target(self):
        if self.target is not None:
            return self.target
        return _clamp(self.min_value, 0, self.max_value)

    def do_generator(self, size):
        lower, upper, target = self.min_value, self.max_value, self.effective_target
        # Half of the draws come from a window around the target whose width
        # grows with the size hint, so that small values are common.
        near_lower = max(lower, target - size)
        near_upper = min(upper, target + size)

        def draw(random):
            if biased_coin(random, 0.5):
                value = random.randint(near_lower, near_upper)
            else:
                value = random.randint(lower, upper)
            return ShrinkableInteger(value, lower, upper, target)

        return RandomGenerator(draw, description=repr(self))

    def do_edge_cases(self, max_edge_cases):
        lower, upper, target = self.min_value, self.max_value, self.effective_target
        candidates = [
            target,
            target - 1,
            target + 1,
            target - 2,
            target + 2,
            lower,
            lower + 1,
            upper - 1,
            upper,
        ]
        for value in candidates:
            if lower <= value <= upper:
                yield ShrinkableInteger(value, lower, upper, target)

    def do_exhaustive(self, ceiling):
        count = self.max_value - self.min_value + 1
        if count > ceiling:
            return None
        return ExhaustiveGenerator(
            count, lambda: iter(range(self.min_value, self.max_value + 1))
        )


def integers() -> IntegerArbitrary:
    return IntegerArbitrary()
