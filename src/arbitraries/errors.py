# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.


class ArbitrariesException(Exception):
    """Generic parent class for exceptions thrown by Arbitraries."""


class UnsatisfiedAssumption(ArbitrariesException):
    """An internal error raised by assume.

    Falsifiers translate this into a discarded candidate, so if you're
    seeing it something has gone wrong.
    """


class InvalidArgument(ArbitrariesException, TypeError):
    """Used to indicate that the arguments to an Arbitraries function were in
    some manner incorrect."""


class InvalidState(ArbitrariesException):
    """The system is not in a state where you were allowed to do that."""


class InvalidDefinition(ArbitrariesException, TypeError):
    """Used to indicate that an arbitrary was not well put together and
    cannot produce any values."""


class NoCreatorsFound(InvalidDefinition):
    """No constructor or factory method could be found to create values of
    the requested type."""

    def __init__(self, target):
        super().__init__(
            f"No usable constructors or factory methods found for {target!r}"
        )
        self.target = target


class CannotFindArbitrary(InvalidDefinition):
    """No arbitrary could be resolved for a parameter of a creator."""

    def __init__(self, parameter_type, creator=None):
        message = f"Cannot find an arbitrary for parameter type {parameter_type!r}"
        if creator is not None:
            message += f" of {creator!r}"
        super().__init__(message)
        self.parameter_type = parameter_type
        self.creator = creator


class NoTransformerProviders(InvalidDefinition):
    """A chain was asked to generate values but none of its transformer
    providers can ever be selected."""


class BuilderStepFailed(InvalidDefinition):
    """A builder step could not be applied to the state it was handed.

    The original exception is available as ``__cause__``.
    """


class TooManyFilterMisses(ArbitrariesException):
    """A filtered arbitrary kept producing values that its condition rejected.

    This could be because the condition is too hard to satisfy. If so, try
    building the values you want directly instead of filtering for them.
    """
