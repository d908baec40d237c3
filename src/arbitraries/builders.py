# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""The builder combinator: values made by handing an initial state through a
sequence of steps, each of which may use a generated value to change it.

For example, to generate people through a builder object::

    people = (
        with_builder(PersonBuilder)
        .use(strings().alpha().of_length(10)).in_(PersonBuilder.with_name)
        .maybe_use(integers().between(0, 15), 0.5).in_(PersonBuilder.with_age)
        .build(PersonBuilder.build)
    )

Every generated value starts from a freshly obtained initial state, so
mutable builders are never shared between values, not even between the
candidates tried while shrinking.
"""

from enum import Enum
from itertools import product
from typing import Any, Callable, Union

import attr

from arbitraries.errors import BuilderStepFailed, InvalidArgument
from arbitraries.generation import Arbitrary, create
from arbitraries.generation._internal.exhaustive import exhaustive_product
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.internal.reflection import get_pretty_function_description, repr_call
from arbitraries.internal.utils import biased_coin
from arbitraries.internal.validation import (
    check_arbitrary,
    check_callable,
    check_valid_probability,
)
from arbitraries.shrinking import OptionalShrinkable, Shrinkable, ShrinkingDistance


def _identity(x):
    return x


class StepKind(Enum):
    # The mutator returns the state to hand to the next step.
    RETURNING = "in_"
    # The mutator changes the state in place and its result is ignored.
    SETTER = "in_setter"


@attr.s(frozen=True, repr=False)
class BuilderStep:
    arbitrary = attr.ib()
    mutator = attr.ib()
    probability = attr.ib()
    kind = attr.ib()

    def __repr__(self):
        if self.probability == 1:
            use = f"use({self.arbitrary!r})"
        else:
            use = f"maybe_use({self.arbitrary!r}, {self.probability!r})"
        mutator = get_pretty_function_description(self.mutator)
        return f"{use}.{self.kind.value}({mutator})"

    @property
    def is_always(self):
        return self.probability >= 1

    @property
    def is_never(self):
        return self.probability <= 0

    @property
    def is_optional(self):
        return not (self.is_always or self.is_never)

    def apply(self, state, value):
        try:
            result = self.mutator(state, value)
        except Exception as err:
            raise BuilderStepFailed(
                f"Step {self!r} failed: {repr_call(self.mutator, (state, value))}"
            ) from err
        if self.kind is StepKind.SETTER:
            return state
        return result


class BuilderShrinkable(Shrinkable):
    """A built value, replayed from a fresh initial state whenever it is
    asked for.

    ``parts`` holds the initial state's shrinkable followed by one shrinkable
    per step that can apply.  Optional steps are represented by an
    :class:`~arbitraries.shrinking.OptionalShrinkable`, which is empty when
    the step was skipped and may shrink to skipped.
    """

    def __init__(self, parts, steps, finalizer):
        self.parts = tuple(parts)
        self.steps = steps
        self.finalizer = finalizer

    def value(self):
        initial, *inputs = self.parts
        state = initial.value()
        for step, part in zip(self.steps, inputs):
            if step.is_optional:
                if part.inner is None:
                    continue
                part = part.inner
            state = step.apply(state, part.value())
        return self.finalizer(state)

    def distance(self):
        return ShrinkingDistance.combine(p.distance() for p in self.parts)

    def candidates(self):
        for i, part in enumerate(self.parts):
            for candidate in part.candidates():
                yield BuilderShrinkable(
                    self.parts[:i] + (candidate,) + self.parts[i + 1 :],
                    self.steps,
                    self.finalizer,
                )


class BuilderArbitrary(Arbitrary):
    def __init__(self, initial, steps, finalizer):
        self.initial = initial
        self.steps = steps
        self.finalizer = finalizer
        # Steps which never apply take no part in generation at all.
        self.active_steps = tuple(s for s in steps if not s.is_never)

    def __repr__(self):
        parts = [f"with_builder({self.initial!r})"]
        parts.extend(map(repr, self.steps))
        parts.append(f"build({get_pretty_function_description(self.finalizer)})")
        return ".".join(parts)

    def do_validate(self):
        self.initial.validate()
        for step in self.active_steps:
            step.arbitrary.validate()

    def _shrinkable(self, parts):
        return BuilderShrinkable(parts, self.active_steps, self.finalizer)

    def do_generator(self, size):
        initial = self.initial.generator(size)
        inputs = [step.arbitrary.generator(size) for step in self.active_steps]

        def draw(random):
            parts = [initial.next(random)]
            for step, generator in zip(self.active_steps, inputs):
                part = generator.next(random)
                if step.is_optional:
                    included = biased_coin(random, step.probability)
                    part = OptionalShrinkable(part if included else None)
                parts.append(part)
            return self._shrinkable(parts)

        return RandomGenerator(draw, description=repr(self))

    def do_edge_cases(self, max_edge_cases):
        choices = [list(self.initial.edge_cases(max_edge_cases))]
        for step in self.active_steps:
            edge_cases = list(step.arbitrary.edge_cases(max_edge_cases))
            if step.is_optional:
                edge_cases = [OptionalShrinkable(None)] + [
                    OptionalShrinkable(e) for e in edge_cases
                ]
            choices.append(edge_cases)
        for parts in product(*choices):
            yield self._shrinkable(parts)

    def do_exhaustive(self, ceiling):
        if any(step.is_optional for step in self.active_steps):
            return None
        generators = [self.initial.exhaustive(ceiling)]
        generators.extend(s.arbitrary.exhaustive(ceiling) for s in self.active_steps)
        return exhaustive_product(generators, self._replay, ceiling)

    def _replay(self, values):
        state, *inputs = values
        for step, value in zip(self.active_steps, inputs):
            state = step.apply(state, value)
        return self.finalizer(state)


@attr.s(frozen=True, repr=False)
class BuilderCombinator:
    """An initial state and the steps declared so far.

    Every method returns a new combinator, so a partially declared builder
    can be extended in several different ways.
    """

    initial = attr.ib()
    steps = attr.ib(default=())

    def __repr__(self):
        return ".".join([f"with_builder({self.initial!r})", *map(repr, self.steps)])

    def use(self, arbitrary):
        """Always apply the next step, with a value from ``arbitrary``."""
        return self.maybe_use(arbitrary, 1.0)

    def maybe_use(self, arbitrary, probability):
        """Apply the next step with ``probability``, with a value from
        ``arbitrary``."""
        check_arbitrary(arbitrary, "arbitrary")
        check_valid_probability(probability, "probability")
        return CombinableBuilder(self, arbitrary, probability)

    def build(self, finalizer=None):
        """The arbitrary of ``finalizer`` applied to the final state, or of
        the final state itself."""
        if finalizer is None:
            finalizer = _identity
        check_callable(finalizer, "finalizer")
        return BuilderArbitrary(self.initial, self.steps, finalizer)

    def _with_step(self, step):
        return attr.evolve(self, steps=self.steps + (step,))


@attr.s(frozen=True, repr=False)
class CombinableBuilder:
    """A step that has its value source, waiting for the function that
    applies the value to the state."""

    builder = attr.ib()
    arbitrary = attr.ib()
    probability = attr.ib()

    def __repr__(self):
        return f"{self.builder!r}.maybe_use({self.arbitrary!r}, {self.probability!r})"

    def in_(self, mutator):
        """``mutator(state, value)`` returns the state for the next step."""
        return self._step(mutator, StepKind.RETURNING)

    def in_setter(self, setter):
        """``setter(state, value)`` changes the state in place."""
        return self._step(setter, StepKind.SETTER)

    def _step(self, mutator, kind):
        check_callable(mutator, "mutator")
        return self.builder._with_step(
            BuilderStep(self.arbitrary, mutator, self.probability, kind)
        )


def with_builder(initial: Union[Arbitrary, Callable[[], Any]]) -> BuilderCombinator:
    """Start declaring a builder arbitrary.

    ``initial`` is either an arbitrary of initial states, or a function of no
    arguments that is called for a fresh initial state every time one is
    needed.
    """
    if isinstance(initial, Arbitrary):
        return BuilderCombinator(initial)
    if callable(initial):
        return BuilderCombinator(create(initial))
    raise InvalidArgument(
        f"Expected an arbitrary or a function of no arguments but got "
        f"initial={initial!r} (type={type(initial).__name__})"
    )
