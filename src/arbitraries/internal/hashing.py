# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Hashing and de-duplication for values that may not be hashable.

Generated values are often lists, mutable objects with ``__eq__`` but no
``__hash__``, or containers of them.  Edge case and exhaustive enumeration
still have to de-duplicate them by equality, so we hash them anyway.
"""

from functools import singledispatch


@singledispatch
def hash_everything(x):
    try:
        return hash(x)
    except TypeError:
        pass
    h = hash(type(x).__name__)
    try:
        h ^= hash(len(x))
    except (TypeError, AttributeError):
        pass
    try:
        iterator = iter(x)
    except (TypeError, AttributeError):
        return h
    for y in iterator:
        h ^= hash_everything(y)
    return h


@hash_everything.register(dict)
def dict_hash(x):
    base = hash(type(x).__name__)
    for t in x.items():
        base ^= hash_everything(t)
    return base


@hash_everything.register(list)
@hash_everything.register(tuple)
def sequence_hash(x):
    return hash((type(x).__name__, *map(hash_everything, x)))


class HashItAnyway:
    __slots__ = ("wrapped", "h")

    def __init__(self, wrapped):
        self.wrapped = wrapped
        self.h = hash_everything(wrapped)

    def __eq__(self, other):
        return (
            isinstance(other, HashItAnyway)
            and self.h == other.h
            and self.wrapped == other.wrapped
        )

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return self.h

    def __repr__(self):
        return f"HashItAnyway({self.wrapped!r})"


def unique_by_value(values, key=lambda x: x):
    """Yield the elements of ``values`` whose ``key`` has not been seen
    before, in their original order."""
    seen = set()
    for v in values:
        k = HashItAnyway(key(v))
        if k not in seen:
            seen.add(k)
            yield v
