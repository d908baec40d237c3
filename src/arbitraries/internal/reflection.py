# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Helpers for describing functions and calls in reprs and reports, going to
some lengths to show lambdas as they were written."""

import ast
import inspect
import textwrap
import types
from functools import partial

LAMBDA_DESCRIPTION_CACHE = {}


def _extract_lambdas(tree):
    return [node for node in ast.walk(tree) if isinstance(node, ast.Lambda)]


def _lambda_description(f):
    try:
        source = textwrap.dedent(inspect.getsource(f)).strip()
    except (OSError, TypeError):
        return "lambda: <unknown>"
    # The source of a lambda is the whole line it appears on, which need not be
    # a complete statement, so strip from the right until it parses.
    source = source[source.index("lambda") :] if "lambda" in source else source
    while source:
        try:
            tree = ast.parse(source)
        except SyntaxError:
            source = source[:-1]
            continue
        lambdas = _extract_lambdas(tree)
        if len(lambdas) == 1:
            return ast.unparse(lambdas[0])
        break
    return "lambda: <unknown>"


def lambda_description(f):
    try:
        return LAMBDA_DESCRIPTION_CACHE[f]
    except (KeyError, TypeError):
        pass
    description = _lambda_description(f)
    try:
        LAMBDA_DESCRIPTION_CACHE[f] = description
    except TypeError:  # pragma: no cover
        pass
    return description


def get_pretty_function_description(f):
    if isinstance(f, partial):
        return repr(f)
    if not hasattr(f, "__name__"):
        return repr(f)
    name = f.__name__
    if name == "<lambda>":
        return lambda_description(f)
    elif isinstance(f, (types.MethodType, types.BuiltinMethodType)):
        self = f.__self__
        if not (self is None or inspect.isclass(self) or inspect.ismodule(self)):
            return f"{self!r}.{name}"
    return getattr(f, "__qualname__", name)


def nicerepr(v):
    if inspect.isfunction(v) or inspect.ismethod(v):
        return get_pretty_function_description(v)
    elif isinstance(v, type):
        return v.__name__
    else:
        return repr(v)


def repr_call(f, args, kwargs=None):
    bits = [nicerepr(x) for x in args]
    for name, value in sorted((kwargs or {}).items()):
        bits.append(f"{name}={nicerepr(value)}")
    rep = nicerepr(f) if not isinstance(f, str) else f
    if rep.startswith("lambda") and ":" in rep:
        rep = f"({rep})"
    return rep + "(" + ", ".join(bits) + ")"
