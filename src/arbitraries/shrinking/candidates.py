# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Candidate streams for the basic shapes of value we know how to simplify.

Each function here yields a finite number of candidates, and every candidate
is strictly closer to the simplest value than the one it was derived from, so
that a search which only ever moves to a yielded candidate must terminate.
"""


def integers_towards(value, target):
    """Yield the integers strictly between ``target`` and ``value`` (and the
    target itself) that are worth trying, simplest first.

    We try the target, then points that halve the remaining gap again and
    again, ending with the immediate neighbour of ``value``.  A search that
    keeps moving to the first of these that still works performs a binary
    search towards the target.
    """
    if value == target:
        return
    sign = 1 if value > target else -1
    gap = abs(value - target)
    yield target
    seen = {0}
    shift = 1
    while (gap >> shift) > 0 or shift == 1:
        d = gap - (gap >> shift)
        if d not in seen and d < gap:
            seen.add(d)
            yield target + sign * d
        if (gap >> shift) == 0:
            break
        shift += 1


def deletions(length, min_size):
    """Yield ``(start, stop)`` slices whose removal keeps at least ``min_size``
    elements of a sequence of the given length.

    We start by cutting straight down to ``min_size`` and then try ever smaller
    runs at every position, ending with single elements.  Runs are taken from
    the back first, because deletions towards the end are more likely to work.
    """
    removable = length - min_size
    if removable <= 0:
        return
    yield (min_size, length)
    seen = {(min_size, length)}
    run = removable // 2
    while run >= 1:
        for start in range(length - run, -1, -1):
            if (start, start + run) not in seen:
                seen.add((start, start + run))
                yield (start, start + run)
        run //= 2
