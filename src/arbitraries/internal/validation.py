# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import math
from numbers import Real

from arbitraries.errors import InvalidArgument


def check_type(typ, arg, name):
    if not isinstance(arg, typ):
        if isinstance(typ, tuple):
            assert len(typ) >= 2, "Use bare type instead of len-1 tuple"
            typ_string = "one of " + ", ".join(t.__name__ for t in typ)
        else:
            typ_string = typ.__name__
        raise InvalidArgument(
            f"Expected {typ_string} but got {name}={arg!r} (type={type(arg).__name__})"
        )


def check_callable(arg, name):
    if not callable(arg):
        raise InvalidArgument(
            f"Expected a callable but got {name}={arg!r} (type={type(arg).__name__})"
        )


def check_arbitrary(arg, name):
    from arbitraries.generation._internal.core import Arbitrary

    check_type(Arbitrary, arg, name)


def check_valid_integer(value, name):
    """Checks that value is either unspecified, or a valid integer.

    Otherwise raises InvalidArgument.
    """
    if value is None:
        return
    if isinstance(value, bool):
        raise InvalidArgument(f"Expected an integer but got {name}={value!r}")
    check_type(int, value, name)


def check_valid_size(value, name):
    """Checks that value is either unspecified, or a valid non-negative size
    expressed as an integer.

    Otherwise raises InvalidArgument.
    """
    if value is None:
        return
    check_valid_integer(value, name)
    if value < 0:
        raise InvalidArgument(f"Invalid size {name}={value!r} < 0")


def check_positive_size(value, name):
    if value is None:
        raise InvalidArgument(f"Expected a positive integer but got {name}=None")
    check_valid_integer(value, name)
    if value < 1:
        raise InvalidArgument(f"{name}={value!r} must be at least one.")


def check_valid_interval(lower_bound, upper_bound, lower_name, upper_name):
    """Checks that lower_bound and upper_bound are either unspecified, or they
    define a valid interval on the number line.

    Otherwise raises InvalidArgument.
    """
    if lower_bound is None or upper_bound is None:
        return
    if upper_bound < lower_bound:
        raise InvalidArgument(
            f"Cannot have {upper_name}={upper_bound!r} < {lower_name}={lower_bound!r}"
        )


def check_valid_sizes(min_size, max_size):
    check_valid_size(min_size, "min_size")
    check_valid_size(max_size, "max_size")
    check_valid_interval(min_size, max_size, "min_size", "max_size")


def check_valid_probability(p, name):
    if isinstance(p, bool) or not isinstance(p, Real):
        raise InvalidArgument(
            f"Expected a probability but got {name}={p!r} (type={type(p).__name__})"
        )
    if math.isnan(p) or not 0 <= p <= 1:
        raise InvalidArgument(f"{name}={p!r} must be between 0.0 and 1.0")
