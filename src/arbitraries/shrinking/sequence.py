# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import datetime
import time
from enum import Enum
from itertools import islice
from operator import itemgetter
from typing import TYPE_CHECKING, Optional, Union

from sortedcontainers import SortedKeyList

from arbitraries._settings import settings
from arbitraries.errors import InvalidArgument, UnsatisfiedAssumption
from arbitraries.internal.hashing import HashItAnyway
from arbitraries.reporting import debug_report, verbose_report
from arbitraries.utils.conventions import not_set

if TYPE_CHECKING:
    from arbitraries.shrinking.shrinkables import Shrinkable


class Falsification(Enum):
    """What a falsifier decided about one shrink candidate."""

    STILL_FALSIFIES = "still falsifies"
    DOES_NOT_FALSIFY = "does not falsify"
    DISCARD = "discard"

    def __repr__(self):
        return f"Falsification.{self.name}"


def falsifier(test):
    """Adapt a property body into a falsifier.

    A candidate still falsifies if ``test`` raises or returns ``False``, and
    is discarded if ``test`` rejects it through :func:`~arbitraries.assume`.
    A test that already returns :class:`Falsification` values is trusted.
    """

    def falsify(value):
        try:
            result = test(value)
        except UnsatisfiedAssumption:
            return Falsification.DISCARD
        except Exception:
            return Falsification.STILL_FALSIFIES
        if isinstance(result, Falsification):
            return result
        if result is False:
            return Falsification.STILL_FALSIFIES
        return Falsification.DOES_NOT_FALSIFY

    falsify.test = test
    return falsify


class ShrinkingSequence:
    """A search for the simplest value that still falsifies, starting from
    one falsifying shrinkable.

    We keep a frontier of candidates that are strictly simpler than the
    current best.  Candidates are pulled from the current best in batches
    of FRONTIER_BATCH, and only once the frontier has run dry, so the
    ordering by distance, and then by the order in which the current best
    produced them, holds within a batch but not across batches.  Each step
    tries the first candidate in the frontier:

    * if it still falsifies it becomes the current best and the frontier is
      rebuilt from its candidates;
    * if it does not falsify it is dropped;
    * if it is discarded it is dropped too, but counted separately, because
      it says nothing about whether shrinking in that direction works.

    The search is done when the frontier runs dry.  Because every accepted
    candidate is strictly simpler, and values are never tried twice, the
    search terminates.  Two sequences started from the same shrinkable with
    the same falsifier take exactly the same steps.
    """

    # Candidates are pulled into the frontier lazily, this many at a time, so
    # that a shrinkable with a very large candidate stream does not have to
    # materialise all of it before the first step.
    FRONTIER_BATCH = 100

    def __init__(self, start, falsifier, *, on_improvement=None, explore=True):
        self.current = start
        self.falsifier = falsifier
        self.on_improvement = on_improvement
        self.steps = 0
        self.improvements = 0
        self.rejections = 0
        self.discards = 0
        self.skipped = 0
        self.budget_exhausted = False
        self.__seen = {HashItAnyway(start.value())}
        self.__frontier = SortedKeyList(key=itemgetter(0, 1))
        self.__discovered = 0
        self.__candidates = None
        if explore:
            self.__regenerate()

    @classmethod
    def dont_shrink(cls, shrinkable):
        """A sequence that is already finished at ``shrinkable``."""
        return cls(shrinkable, None, explore=False)

    def __repr__(self):
        return (
            f"ShrinkingSequence(current={self.current!r}, steps={self.steps}, "
            f"done={self.is_done})"
        )

    @property
    def is_done(self):
        return not self.__frontier and self.__candidates is None

    def result(self):
        return self.current

    def __regenerate(self):
        self.__frontier.clear()
        self.__candidates = iter(self.current.candidates())

    def __refill(self):
        limit = self.current.distance()
        batch = list(islice(self.__candidates, self.FRONTIER_BATCH))
        if len(batch) < self.FRONTIER_BATCH:
            self.__candidates = None
        for candidate in batch:
            distance = candidate.distance()
            if distance < limit:
                self.__frontier.add((distance.sort_key(), self.__discovered, candidate))
                self.__discovered += 1

    def step(self) -> bool:
        """Try the next candidate whose value has not been tried before, if
        there is one.

        Returns False once the search is done, and True otherwise, whether
        or not this step found a simpler falsifying value.  Candidates with
        an already tried value are passed over without counting as a step.
        """
        while True:
            while not self.__frontier:
                if self.__candidates is None:
                    return False
                self.__refill()
            _, _, candidate = self.__frontier.pop(0)
            key = HashItAnyway(candidate.value())
            if key not in self.__seen:
                break
            self.skipped += 1
        self.__seen.add(key)
        self.steps += 1

        outcome = self.falsifier(candidate.value())
        if not isinstance(outcome, Falsification):
            raise InvalidArgument(
                f"Falsifier {self.falsifier!r} returned {outcome!r}, which is not "
                "a Falsification.  Wrap plain test functions with falsifier()."
            )
        if outcome is Falsification.STILL_FALSIFIES:
            self.improvements += 1
            debug_report(
                lambda: f"Shrunk to {candidate.value()!r} ({candidate.distance()!r})"
            )
            self.current = candidate
            if self.on_improvement is not None:
                self.on_improvement(candidate)
            self.__regenerate()
        elif outcome is Falsification.DISCARD:
            self.discards += 1
        else:
            self.rejections += 1
        return True

    def run(
        self,
        max_steps: Optional[int] = not_set,  # type: ignore
        max_duration: Union[datetime.timedelta, float, None] = not_set,  # type: ignore
    ) -> "Shrinkable":
        """Step until the search is done or a budget runs out, and return the
        simplest falsifying shrinkable found.

        ``max_steps`` and ``max_duration`` default to the ``max_shrink_steps``
        and ``shrink_deadline`` settings; ``None`` removes the limit.
        ``max_duration`` is a timedelta or a number of seconds.
        """
        current_settings = settings.default
        if max_steps is not_set:
            max_steps = current_settings.max_shrink_steps
        if max_duration is not_set:
            max_duration = current_settings.shrink_deadline
        if isinstance(max_duration, datetime.timedelta):
            max_duration = max_duration.total_seconds()

        start_time = time.perf_counter()
        taken = 0
        while not self.is_done:
            if max_steps is not None and taken >= max_steps:
                self.__stop_early(f"after {taken} steps")
                break
            if (
                max_duration is not None
                and time.perf_counter() - start_time >= max_duration
            ):
                self.__stop_early(f"after {max_duration:.2f} seconds")
                break
            if not self.step():
                break
            taken += 1
        return self.result()

    def __stop_early(self, reason):
        self.budget_exhausted = True
        verbose_report(
            lambda: f"Shrinking stopped {reason} at {self.current.value()!r}; "
            "smaller falsifying values may exist."
        )
