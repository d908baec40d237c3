# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from arbitraries.errors import UnsatisfiedAssumption


def reject():
    raise UnsatisfiedAssumption


def assume(condition):
    """Calling ``assume`` is like an :ref:`assert <python:assert>` that marks
    the value as outside the precondition space, rather than falsifying it.

    Inside a falsifier this turns a shrink candidate into a discard, which
    neither counts as a failed shrink attempt nor ends the search.
    """
    if not condition:
        raise UnsatisfiedAssumption
    return True
