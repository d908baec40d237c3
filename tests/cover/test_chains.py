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

import pytest

from arbitraries import Transformer, chains
from arbitraries.errors import InvalidArgument, NoTransformerProviders
from arbitraries.stateful import Chain

from tests.common.debug import (
    assert_all_generated,
    assert_at_least_one_generated,
    generate_first,
    minimal,
)


def append(value):
    def provider(state):
        return Transformer.mutate(f"append {value!r}", lambda s: s.append(value))

    return provider


def increment(state):
    return Transformer("inc", lambda n: n + 1)


def decrement(state):
    return Transformer("dec", lambda n: n - 1)


def counters(max_size=30):
    return (
        chains(lambda: 0)
        .with_transformation(increment)
        .with_transformation(decrement)
        .of_max_size(max_size)
    )


@pytest.mark.parametrize(
    "size, length", [(1, 10), (100, 10), (400, 20), (10000, 100)]
)
def test_length_follows_the_generation_size(size, length):
    chain = generate_first(chains(list).with_transformation(append(1)), Random(0), size)
    assert len(chain) == length
    assert chain.final_state() == [1] * length


def test_max_size_overrides_the_generation_size():
    arbitrary = chains(list).with_transformation(append(1)).of_max_size(5)
    assert len(generate_first(arbitrary, Random(0), 10000)) == 5


def test_chains_have_no_edge_cases_and_no_exhaustive_generation():
    arbitrary = chains(list).with_transformation(append(1))
    assert len(arbitrary.edge_cases()) == 0
    assert arbitrary.exhaustive() is None


def test_needs_a_provider():
    with pytest.raises(NoTransformerProviders):
        chains(list).generator()


def test_needs_a_provider_with_positive_frequency():
    arbitrary = chains(list).with_transformation(append(1), 0)
    with pytest.raises(NoTransformerProviders):
        arbitrary.generator()


@pytest.mark.parametrize("frequency", [-1, True, 1.5, "1"])
def test_invalid_frequencies(frequency):
    with pytest.raises(InvalidArgument):
        chains(list).with_transformation(append(1), frequency)


def test_invalid_chain_definitions():
    with pytest.raises(InvalidArgument):
        chains(list).of_max_size(0)
    with pytest.raises(InvalidArgument):
        chains(list).with_transformation(42)
    with pytest.raises(InvalidArgument):
        chains([])


def test_providers_with_zero_frequency_are_never_chosen():
    arbitrary = (
        chains(list)
        .with_transformation(append("a"))
        .with_transformation(append("b"), 0)
    )
    assert_all_generated(
        arbitrary.generator(), Random(0), lambda c: "b" not in c.final_state()
    )


def test_all_providers_with_positive_frequency_are_chosen():
    arbitrary = (
        chains(list)
        .with_transformation(append("a"))
        .with_transformation(append("b"), 3)
    )
    generator = arbitrary.generator()
    assert_at_least_one_generated(generator, Random(0), lambda c: "a" in c.final_state())
    assert_at_least_one_generated(generator, Random(0), lambda c: "b" in c.final_state())


def test_iteration_starts_from_a_fresh_state():
    chain = generate_first(chains(list).with_transformation(append(1)), Random(0))
    first = chain.final_state()
    second = chain.final_state()
    assert first == second == [1] * len(chain)
    assert first is not second
    assert [len(s) for s in chain] == list(range(1, len(chain) + 1))


def test_same_seed_gives_the_same_chain():
    arbitrary = counters()
    generator = arbitrary.generator()
    first = generator.next(Random(7)).value()
    second = generator.next(Random(7)).value()
    assert first == second
    assert first.transformations() == second.transformations()
    assert hash(first) == hash(second)


def test_chain_ends_when_no_provider_applies():
    def provider(state):
        if len(state) < 3:
            return Transformer.mutate("append", lambda s: s.append(0))
        return None

    arbitrary = chains(list).with_transformation(provider).of_max_size(10)
    chain = generate_first(arbitrary, Random(0))
    assert len(chain) == 3
    assert chain.final_state() == [0, 0, 0]


def test_chain_ends_at_end_of_chain():
    def provider(state):
        if len(state) >= 2:
            return Transformer.END_OF_CHAIN
        return Transformer.mutate("append", lambda s: s.append(0))

    arbitrary = chains(list).with_transformation(provider).of_max_size(10)
    chain = generate_first(arbitrary, Random(0))
    assert len(chain) == 2
    assert chain.final_state() == [0, 0]


def test_transformations_are_described():
    arbitrary = chains(list).with_transformation(append(1)).of_max_size(3)
    chain = generate_first(arbitrary, Random(0))
    assert chain.transformations() == ["append 1"] * 3
    assert repr(chain) == "Chain[append 1, append 1, append 1]"


def double(state):
    return state * 2


def test_plain_functions_are_valid_transformers():
    arbitrary = chains(lambda: 1).with_transformation(lambda s: double).of_max_size(3)
    chain = generate_first(arbitrary, Random(0))
    assert list(chain) == [2, 4, 8]
    assert chain.transformations() == ["double"] * 3


def test_noop_keeps_the_state():
    arbitrary = chains(lambda: 5).with_transformation(lambda s: Transformer.noop())
    chain = generate_first(arbitrary.of_max_size(4), Random(0))
    assert list(chain) == [5] * 4


def test_shrinks_by_removing_and_simplifying_steps():
    chain = minimal(counters(), lambda c: c.final_state() >= 3)
    assert isinstance(chain, Chain)
    assert chain.transformations() == ["inc"] * 3


def test_shrinking_never_switches_to_providers_that_are_never_chosen():
    def never(state):
        return Transformer("never", lambda n: n + 100)

    arbitrary = (
        chains(lambda: 0)
        .with_transformation(never, 0)
        .with_transformation(increment)
        .with_transformation(decrement)
        .of_max_size(30)
    )
    chain = minimal(arbitrary, lambda c: c.final_state() >= 3)
    assert chain.transformations() == ["inc"] * 3


def test_shrunk_chains_skip_steps_that_no_longer_apply():
    def pop(state):
        if state:
            return Transformer.mutate("pop", lambda s: s.pop())
        return None

    arbitrary = (
        chains(list)
        .with_transformation(append(1))
        .with_transformation(pop)
        .of_max_size(20)
    )
    chain = minimal(arbitrary, lambda c: "pop" in c.transformations())
    assert chain.transformations() == ["append 1", "pop"]
