# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import heapq
import math

from arbitraries.errors import InvalidArgument


def biased_coin(random, p):
    """Return True with probability p.

    Certain outcomes do not consume any randomness, so that a step which is
    always or never taken leaves the random stream of its siblings alone.
    """
    if p <= 0:
        return False
    if p >= 1:
        return True
    return random.random() < p


def check_sample(values, name):
    values = tuple(values)
    if not values:
        raise InvalidArgument(f"Cannot sample from a length-zero {name}.")
    return values


class Sampler:
    """Sampler based on Vose's algorithm for the alias method. See
    http://www.keithschwarz.com/darts-dice-coins/ for a good explanation.

    The general idea is that we store a table of triples (base, alternate, p).
    base. We then pick a triple uniformly at random, and choose its alternate
    value with probability p and else choose its base value. The triples are
    chosen so that the resulting mixture has the right distribution.

    We maintain the following invariants to try to produce good shrinks:

    1. The table is in lexicographic (base, alternate) order, so that choosing
       an earlier value in the list always lowers (or at least leaves
       unchanged) the value.
    2. base[i] < alternate[i], so that shrinking the draw always results in
       shrinking the chosen element.

    Zero weights are allowed and are never sampled, but at least one weight
    must be positive.
    """

    def __init__(self, weights):
        n = len(weights)
        total = sum(weights)
        if n == 0 or total <= 0:
            raise InvalidArgument(
                f"Cannot sample from weights={list(weights)!r} with no positive weight"
            )

        self.table = [[i, None, None] for i in range(n)]

        small = []
        large = []

        scaled_probabilities = []

        for i, w in enumerate(weights):
            scaled = w * n / total
            scaled_probabilities.append(scaled)
            if scaled == 1:
                self.table[i][2] = 0.0
            elif scaled < 1:
                small.append(i)
            else:
                large.append(i)
        heapq.heapify(small)
        heapq.heapify(large)

        while small and large:
            lo = heapq.heappop(small)
            hi = heapq.heappop(large)

            assert lo != hi
            assert scaled_probabilities[hi] > 1
            assert self.table[lo][1] is None
            self.table[lo][1] = hi
            self.table[lo][2] = 1 - scaled_probabilities[lo]
            scaled_probabilities[hi] = (
                scaled_probabilities[hi] + scaled_probabilities[lo]
            ) - 1

            if scaled_probabilities[hi] < 1:
                heapq.heappush(small, hi)
            elif scaled_probabilities[hi] == 1:
                self.table[hi][2] = 0.0
            else:
                heapq.heappush(large, hi)
        while large:
            self.table[large.pop()][2] = 0.0
        while small:
            # Floating point error can leave a bucket fractionally short of
            # one, in which case it keeps its own value.
            self.table[small.pop()][2] = 0.0

        self.weights = tuple(weights)
        for entry in self.table:
            assert entry[2] is not None
            if entry[1] is None:
                entry[1] = entry[0]
            elif entry[1] < entry[0]:
                entry[0], entry[1] = entry[1], entry[0]
                entry[2] = 1 - entry[2]
        self.table.sort()

    def sample(self, random):
        while True:
            base, alternate, alternate_chance = self.table[
                random.randrange(len(self.table))
            ]
            result = alternate if biased_coin(random, alternate_chance) else base
            # Rounding in the table can leave a sliver of probability on a
            # zero-weight entry, which we must never select.
            if self.weights[result] > 0:
                return result


def sqrt_size(size, minimum):
    """The size-derived length used for chains and default collections: the
    rounded square root of ``size``, but never less than ``minimum``."""
    return max(int(round(math.sqrt(size))), minimum)
