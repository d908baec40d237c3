# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from arbitraries.shrinking.distance import ShrinkingDistance
from arbitraries.shrinking.sequence import Falsification, ShrinkingSequence, falsifier
from arbitraries.shrinking.shrinkables import (
    CombinedShrinkable,
    FilteredShrinkable,
    FlatMappedShrinkable,
    MappedShrinkable,
    OptionalShrinkable,
    Shrinkable,
    ShrinkableChoice,
    ShrinkableInteger,
    ShrinkableList,
    Unshrinkable,
    unshrinkable,
)

__all__ = [
    "CombinedShrinkable",
    "Falsification",
    "FilteredShrinkable",
    "FlatMappedShrinkable",
    "MappedShrinkable",
    "OptionalShrinkable",
    "Shrinkable",
    "ShrinkableChoice",
    "ShrinkableInteger",
    "ShrinkableList",
    "ShrinkingDistance",
    "ShrinkingSequence",
    "Unshrinkable",
    "falsifier",
    "unshrinkable",
]
