# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from arbitraries.generation._internal.collections import ListArbitrary, lists
from arbitraries.generation._internal.core import Arbitrary
from arbitraries.generation._internal.edge_cases import EdgeCases
from arbitraries.generation._internal.exhaustive import ExhaustiveGenerator
from arbitraries.generation._internal.generators import RandomGenerator
from arbitraries.generation._internal.misc import (
    Combinator,
    combine,
    create,
    frequency_of,
    just,
    of,
    one_of,
)
from arbitraries.generation._internal.numbers import IntegerArbitrary, integers
from arbitraries.generation._internal.strings import (
    CharacterArbitrary,
    StringArbitrary,
    characters,
    strings,
)

__all__ = [
    "Arbitrary",
    "CharacterArbitrary",
    "Combinator",
    "EdgeCases",
    "ExhaustiveGenerator",
    "IntegerArbitrary",
    "ListArbitrary",
    "RandomGenerator",
    "StringArbitrary",
    "characters",
    "combine",
    "create",
    "frequency_of",
    "integers",
    "just",
    "lists",
    "of",
    "one_of",
    "strings",
]
