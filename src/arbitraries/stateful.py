# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Chains: sequences of states made by repeatedly transforming a state, for
stateful and model based testing.

A chain is declared with a supplier of initial states and a number of
transformer providers.  A provider is a function which, given the current
state, returns a :class:`Transformer` (any function from state to state) or
None when it has nothing to offer for that state::

    stacks = (
        chains(list)
        .with_transformation(lambda s: Transformer.mutate("push", push))
        .with_transformation(lambda s: Transformer.mutate("pop", pop) if s else None)
        .of_max_size(20)
    )

A generated chain remembers which provider it used for each step and
replays them from a freshly supplied initial state whenever it is iterated.
Chains shrink by dropping steps and by switching steps to providers that
were declared earlier.
"""

from random import Random
from typing import Any, Callable

import attr

from arbitraries.errors import InvalidArgument, NoTransformerProviders
from arbitraries.generation import Arbitrary
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.internal.reflection import get_pretty_function_description
from arbitraries.internal.utils import Sampler, sqrt_size
from arbitraries.internal.validation import check_callable, check_positive_size
from arbitraries.reporting import debug_report
from arbitraries.shrinking import Shrinkable, ShrinkingDistance
from arbitraries.shrinking.candidates import deletions

# How many providers we ask, one after the other, for a transformer that
# applies to the current state before we end the chain early.
MAX_NOT_APPLICABLE = 100


@attr.s(frozen=True, repr=False)
class Transformer:
    """A described function from state to state."""

    description = attr.ib()
    transform = attr.ib()

    def __call__(self, state):
        return self.transform(state)

    def __repr__(self):
        return self.description

    @classmethod
    def mutate(cls, description, mutator):
        """A transformer which changes the state in place."""

        def transform(state):
            mutator(state)
            return state

        return cls(description, transform)

    @classmethod
    def noop(cls):
        return cls("noop", lambda state: state)


# Returned by a provider to end the chain at the current state.
Transformer.END_OF_CHAIN = Transformer("end of chain", lambda state: state)


def describe_transformer(transformer):
    if isinstance(transformer, Transformer):
        return transformer.description
    return get_pretty_function_description(transformer)


class Chain:
    """One generated chain.

    Iterating a chain starts from a fresh initial state and yields the state
    after each transformation.  A step whose provider has nothing to offer
    for the state it sees is skipped, which can only happen once a chain has
    been shrunk.
    """

    def __init__(self, initial_supplier, providers, plan, max_size):
        self.initial_supplier = initial_supplier
        self.providers = providers
        self.plan = tuple(plan)
        self.max_size = max_size

    def __len__(self):
        return len(self.plan)

    def __iter__(self):
        for _, state in self._replay():
            yield state

    def _replay(self):
        state = self.initial_supplier()
        for index in self.plan:
            transformer = self.providers[index](state)
            if transformer is None:
                continue
            if transformer is Transformer.END_OF_CHAIN:
                return
            state = transformer(state)
            yield transformer, state

    def transformations(self):
        """Descriptions of the transformations applied, in order."""
        return [describe_transformer(t) for t, _ in self._replay()]

    def final_state(self):
        state = self.initial_supplier()
        for state in self:
            pass
        return state

    def __eq__(self, other):
        if not isinstance(other, Chain):
            return NotImplemented
        return (
            self.plan == other.plan
            and self.providers == other.providers
            and self.initial_supplier == other.initial_supplier
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self.plan)

    def __repr__(self):
        return "Chain[{}]".format(", ".join(self.transformations()))


class ShrinkableChain(Shrinkable):
    """A chain, as the provider indices chosen for each step.

    The indices are chosen on first use from a random seeded with ``seed``,
    so generating a chain does not consume randomness beyond the seed.
    """

    def __init__(
        self, initial_supplier, providers, weights, max_size, seed, plan=None
    ):
        self.initial_supplier = initial_supplier
        self.providers = providers
        self.weights = weights
        self.max_size = max_size
        self.seed = seed
        self._plan = None if plan is None else tuple(plan)

    @property
    def plan(self):
        if self._plan is None:
            self._plan = self._generate_plan()
        return self._plan

    def _generate_plan(self):
        random = Random(self.seed)
        sampler = Sampler(self.weights)
        state = self.initial_supplier()
        plan = []
        while len(plan) < self.max_size:
            for _ in range(MAX_NOT_APPLICABLE):
                index = sampler.sample(random)
                transformer = self.providers[index](state)
                if transformer is not None:
                    break
            else:
                debug_report(
                    lambda: f"Ending chain after {len(plan)} steps: no provider applied "
                    f"to {state!r} in {MAX_NOT_APPLICABLE} attempts"
                )
                break
            if transformer is Transformer.END_OF_CHAIN:
                break
            state = transformer(state)
            plan.append(index)
        return tuple(plan)

    def _with_plan(self, plan):
        return ShrinkableChain(
            self.initial_supplier,
            self.providers,
            self.weights,
            self.max_size,
            self.seed,
            plan,
        )

    def value(self):
        return Chain(self.initial_supplier, self.providers, self.plan, self.max_size)

    def distance(self):
        return ShrinkingDistance.of(len(self.plan), sum(self.plan))

    def candidates(self):
        plan = self.plan
        for start, stop in deletions(len(plan), 0):
            yield self._with_plan(plan[:start] + plan[stop:])
        for i, index in enumerate(plan):
            for alternative in range(index):
                if self.weights[alternative] > 0:
                    yield self._with_plan(plan[:i] + (alternative,) + plan[i + 1 :])


@attr.s(repr=False, eq=False)
class ChainArbitrary(Arbitrary):
    """Arbitrary of :class:`Chain`.

    Chains have no edge cases and cannot be enumerated exhaustively.
    """

    initial_supplier = attr.ib()
    weighted_providers = attr.ib(default=())
    max_size = attr.ib(default=None)

    def __repr__(self):
        providers = "".join(
            f".with_transformation({get_pretty_function_description(p)}, {f!r})"
            for f, p in self.weighted_providers
        )
        result = f"chains({get_pretty_function_description(self.initial_supplier)})"
        result += providers
        if self.max_size is not None:
            result += f".of_max_size({self.max_size!r})"
        return result

    def with_transformation(self, provider, frequency=1):
        """Add a transformer provider, chosen for a step in proportion to
        ``frequency``.  A provider with frequency zero is never chosen."""
        check_callable(provider, "provider")
        if isinstance(frequency, bool) or not isinstance(frequency, int):
            raise InvalidArgument(
                f"Expected an integer but got frequency={frequency!r} "
                f"(type={type(frequency).__name__})"
            )
        if frequency < 0:
            raise InvalidArgument(f"frequency={frequency!r} must not be negative")
        return attr.evolve(
            self, weighted_providers=self.weighted_providers + ((frequency, provider),)
        )

    def of_max_size(self, max_size):
        check_positive_size(max_size, "max_size")
        return attr.evolve(self, max_size=max_size)

    def effective_size(self, size):
        if self.max_size is not None:
            return self.max_size
        return sqrt_size(size, 10)

    def do_generator(self, size):
        weights = tuple(f for f, _ in self.weighted_providers)
        if not any(w > 0 for w in weights):
            raise NoTransformerProviders(
                f"{self!r} has no transformer provider that can ever be chosen"
            )
        providers = tuple(p for _, p in self.weighted_providers)
        max_size = self.effective_size(size)

        def draw(random):
            return ShrinkableChain(
                self.initial_supplier,
                providers,
                weights,
                max_size,
                random.getrandbits(64),
            )

        return RandomGenerator(draw, description=repr(self))


def chains(initial_supplier: Callable[[], Any]) -> ChainArbitrary:
    """Start declaring an arbitrary of :class:`Chain`, whose every iteration
    starts from ``initial_supplier()``."""
    check_callable(initial_supplier, "initial_supplier")
    return ChainArbitrary(initial_supplier)
