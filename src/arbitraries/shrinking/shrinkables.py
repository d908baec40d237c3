# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from random import Random

from arbitraries.internal.hashing import hash_everything
from arbitraries.shrinking.candidates import deletions, integers_towards
from arbitraries.shrinking.distance import ShrinkingDistance


class Shrinkable:
    """A generated value, how complex it is, and how to make it simpler.

    The value itself is produced on demand by :meth:`value`, which must
    return an equal value every time it is called but may construct a fresh
    object on every call.  This is what lets shrinking replay mutable values
    (builders, chains) without any two candidates sharing state.

    Shrinkables are immutable and compare by the value they produce.
    """

    def value(self):
        raise NotImplementedError(f"{type(self).__name__}.value")

    def distance(self):
        raise NotImplementedError(f"{type(self).__name__}.distance")

    def candidates(self):
        """Yield simpler versions of this shrinkable, in the order they should
        be tried when their distances tie."""
        return iter(())

    def shrink(self, falsifier):
        from arbitraries.shrinking.sequence import ShrinkingSequence

        return ShrinkingSequence(self, falsifier)

    def map(self, mapper):
        return MappedShrinkable(self, mapper)

    def filter(self, condition):
        return FilteredShrinkable(self, condition)

    def make_unshrinkable(self):
        return Unshrinkable(self.value, self.distance())

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Shrinkable):
            return NotImplemented
        return self.value() == other.value()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash_everything(self.value())

    def __repr__(self):
        return f"{type(self).__name__}<{self.value()!r}:{self.distance()!r}>"


class Unshrinkable(Shrinkable):
    """A terminal shrinkable, which declares that it cannot be simplified."""

    def __init__(self, supplier, distance=ShrinkingDistance.MIN):
        self.supplier = supplier
        self._distance = distance

    def value(self):
        return self.supplier()

    def distance(self):
        return self._distance

    def shrink(self, falsifier):
        from arbitraries.shrinking.sequence import ShrinkingSequence

        return ShrinkingSequence.dont_shrink(self)

    def make_unshrinkable(self):
        return self


def unshrinkable(value, distance=ShrinkingDistance.MIN):
    return Unshrinkable(lambda: value, distance)


class ShrinkableInteger(Shrinkable):
    def __init__(self, value, min_value, max_value, target):
        assert min_value <= target <= max_value
        self.integer = value
        self.min_value = min_value
        self.max_value = max_value
        self.target = target

    def value(self):
        return self.integer

    def distance(self):
        return ShrinkingDistance.of(abs(self.integer - self.target))

    def candidates(self):
        for v in integers_towards(self.integer, self.target):
            yield ShrinkableInteger(v, self.min_value, self.max_value, self.target)


class ShrinkableChoice(Shrinkable):
    """One of an ordered tuple of values, shrinking towards earlier ones."""

    def __init__(self, values, index):
        self.values = values
        self.index = index

    def value(self):
        return self.values[self.index]

    def distance(self):
        return ShrinkingDistance.of(self.index)

    def candidates(self):
        for i in integers_towards(self.index, 0):
            yield ShrinkableChoice(self.values, i)


class ShrinkableList(Shrinkable):
    """A list of independently shrinkable elements.

    We first try to delete elements, as a shorter list is nearly always more
    helpful than a list of simpler elements, and then shrink the elements one
    at a time.
    """

    def __init__(self, elements, min_size=0):
        self.elements = tuple(elements)
        self.min_size = min_size

    def value(self):
        return [e.value() for e in self.elements]

    def distance(self):
        return ShrinkingDistance.for_collection(self.elements)

    def candidates(self):
        for start, stop in deletions(len(self.elements), self.min_size):
            yield ShrinkableList(
                self.elements[:start] + self.elements[stop:], self.min_size
            )
        for i, element in enumerate(self.elements):
            for candidate in element.candidates():
                yield ShrinkableList(
                    self.elements[:i] + (candidate,) + self.elements[i + 1 :],
                    self.min_size,
                )


class MappedShrinkable(Shrinkable):
    def __init__(self, source, mapper):
        self.source = source
        self.mapper = mapper

    def value(self):
        return self.mapper(self.source.value())

    def distance(self):
        return self.source.distance()

    def candidates(self):
        for candidate in self.source.candidates():
            yield MappedShrinkable(candidate, self.mapper)


class FilteredShrinkable(Shrinkable):
    """Keeps shrinking within the values that satisfy ``condition``.

    A candidate that fails the condition is not tried itself, but its own
    candidates are, one level down, so that filtering out an intermediate
    value does not cut off everything beyond it.
    """

    def __init__(self, source, condition):
        self.source = source
        self.condition = condition

    def value(self):
        return self.source.value()

    def distance(self):
        return self.source.distance()

    def candidates(self):
        for candidate in self.source.candidates():
            if self.condition(candidate.value()):
                yield FilteredShrinkable(candidate, self.condition)
            else:
                for nested in candidate.candidates():
                    if self.condition(nested.value()):
                        yield FilteredShrinkable(nested, self.condition)


class CombinedShrinkable(Shrinkable):
    """Several independent shrinkables combined into one value.

    ``combinator`` receives the list of part values.  Parts shrink one at a
    time, first parts first, and their distances are concatenated.
    """

    def __init__(self, parts, combinator):
        self.parts = tuple(parts)
        self.combinator = combinator

    def value(self):
        return self.combinator([p.value() for p in self.parts])

    def distance(self):
        return ShrinkingDistance.combine(p.distance() for p in self.parts)

    def candidates(self):
        for i, part in enumerate(self.parts):
            for candidate in part.candidates():
                yield CombinedShrinkable(
                    self.parts[:i] + (candidate,) + self.parts[i + 1 :],
                    self.combinator,
                )


class FlatMappedShrinkable(Shrinkable):
    """A value drawn from an arbitrary that was itself chosen by a value.

    The inner value is regenerated from a fixed seed whenever the outer value
    shrinks, so the same outer value always leads to the same inner value.
    Once the outer value is as simple as it gets, the inner value shrinks.
    """

    def __init__(self, source, mapper, size, seed, inner=None):
        self.source = source
        self.mapper = mapper
        self.size = size
        self.seed = seed
        self._inner = inner

    @property
    def inner(self):
        if self._inner is None:
            arbitrary = self.mapper(self.source.value())
            self._inner = arbitrary.generator(self.size).next(Random(self.seed))
        return self._inner

    def value(self):
        return self.inner.value()

    def distance(self):
        return self.source.distance().append(self.inner.distance())

    def candidates(self):
        for candidate in self.source.candidates():
            yield FlatMappedShrinkable(candidate, self.mapper, self.size, self.seed)
        for candidate in self.inner.candidates():
            yield FlatMappedShrinkable(
                self.source, self.mapper, self.size, self.seed, inner=candidate
            )


class OptionalShrinkable(Shrinkable):
    """A value that may be absent, represented by ``None``.

    A present value first tries to shrink to absent, and then shrinks in
    place.
    """

    def __init__(self, inner=None):
        self.inner = inner

    def value(self):
        if self.inner is None:
            return None
        return self.inner.value()

    def distance(self):
        if self.inner is None:
            return ShrinkingDistance.of(0, 0)
        return ShrinkingDistance.of(1, self.inner.distance().size())

    def candidates(self):
        if self.inner is None:
            return
        yield OptionalShrinkable(None)
        for candidate in self.inner.candidates():
            yield OptionalShrinkable(candidate)
