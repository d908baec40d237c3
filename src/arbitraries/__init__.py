# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Arbitraries is the value generation and shrinking core of a property-based
testing library.

It describes how to produce values as composable arbitraries, produces them
reproducibly from an explicit random source, enumerates their edge cases and
small domains, and searches for the simplest value that still makes a
property fail.
"""

from arbitraries._settings import Verbosity, settings
from arbitraries.builders import with_builder
from arbitraries.control import assume, reject
from arbitraries.generation import (
    Arbitrary,
    characters,
    combine,
    create,
    frequency_of,
    integers,
    just,
    lists,
    of,
    one_of,
    strings,
)
from arbitraries.shrinking import Falsification, falsifier
from arbitraries.stateful import Transformer, chains
from arbitraries.types import for_type, register_type_arbitrary
from arbitraries.version import __version__, __version_info__

__all__ = [
    "Arbitrary",
    "Falsification",
    "Transformer",
    "Verbosity",
    "assume",
    "chains",
    "characters",
    "combine",
    "create",
    "falsifier",
    "for_type",
    "frequency_of",
    "integers",
    "just",
    "lists",
    "of",
    "one_of",
    "register_type_arbitrary",
    "reject",
    "settings",
    "strings",
    "with_builder",
    "__version__",
    "__version_info__",
]
