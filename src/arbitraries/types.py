# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Arbitraries of a type, built from its constructor and factory methods.

How creators are found and how their parameters get values are both
injected, so the generation core never has to look at a class itself:

* ``find_creators(target, constructor_filters, factory_filters)`` returns
  the functions that create ``target`` values.  The default looks at the
  class itself and at its static and class methods annotated to return it.
* ``resolve_parameter(annotation)`` returns the arbitraries a parameter of
  that type could draw from.  The default consults the registry that
  :func:`register_type_arbitrary` adds to.
"""

import inspect
import threading
import typing

import attr

from arbitraries.errors import CannotFindArbitrary, NoCreatorsFound
from arbitraries.generation import Arbitrary, combine, integers, of, one_of, strings
from arbitraries.internal.validation import check_callable, check_type

_type_arbitraries = {}


def register_type_arbitrary(custom_type, factory):
    """Resolve parameters annotated with ``custom_type`` to the arbitrary
    that ``factory()`` returns."""
    check_type(type, custom_type, "custom_type")
    check_callable(factory, "factory")
    _type_arbitraries[custom_type] = factory


register_type_arbitrary(int, integers)
register_type_arbitrary(str, strings)
register_type_arbitrary(bool, lambda: of(False, True))


def resolve_from_registry(annotation):
    try:
        return [_type_arbitraries[annotation]()]
    except (KeyError, TypeError):
        return []


def is_public(creator):
    return not creator.__name__.startswith("_")


def _always(creator):
    return True


def _return_annotation(function):
    try:
        return typing.get_type_hints(function).get("return")
    except (NameError, TypeError):
        return inspect.signature(function).return_annotation


def find_creators_by_inspection(target, constructor_filters, factory_filters):
    creators = []
    if not inspect.isabstract(target) and any(f(target) for f in constructor_filters):
        creators.append(target)
    for name, attribute in vars(target).items():
        if not isinstance(attribute, (staticmethod, classmethod)):
            continue
        function = getattr(target, name)
        if _return_annotation(function) is not target:
            continue
        if any(f(function) for f in factory_filters):
            creators.append(function)
    return creators


def _parameter_hints(creator):
    function = creator.__init__ if inspect.isclass(creator) else creator
    try:
        return typing.get_type_hints(function)
    except (NameError, TypeError):
        return {}


@attr.s(repr=False, eq=False)
class TypeArbitrary(Arbitrary):
    """Values of ``target`` from any of its usable creators, with every
    creator parameter drawn from the arbitrary its type resolves to.

    Until one of the ``use*`` methods is called, the public constructor and
    the public factory methods are used.  The first such call replaces
    these defaults, and further calls add to what it configured.
    """

    target = attr.ib()
    find_creators = attr.ib(default=find_creators_by_inspection)
    resolve_parameter = attr.ib(default=resolve_from_registry)
    explicit_creators = attr.ib(default=())
    constructor_filters = attr.ib(default=(is_public,))
    factory_filters = attr.ib(default=(is_public,))
    defaults_set = attr.ib(default=True)
    _lock = attr.ib(init=False, factory=threading.Lock, repr=False)
    _resolved = attr.ib(init=False, default=None, repr=False)

    def __repr__(self):
        return f"for_type({self.target.__name__})"

    def _configure(self, **changes):
        if self.defaults_set:
            base = attr.evolve(
                self,
                explicit_creators=(),
                constructor_filters=(),
                factory_filters=(),
                defaults_set=False,
            )
        else:
            base = self
        return attr.evolve(
            base,
            **{name: getattr(base, name) + added for name, added in changes.items()},
        )

    def use(self, creator):
        check_callable(creator, "creator")
        return self._configure(explicit_creators=(creator,))

    def use_constructors(self, condition):
        check_callable(condition, "condition")
        return self._configure(constructor_filters=(condition,))

    def use_public_constructors(self):
        return self.use_constructors(is_public)

    def use_all_constructors(self):
        return self.use_constructors(_always)

    def use_factory_methods(self, condition):
        check_callable(condition, "condition")
        return self._configure(factory_filters=(condition,))

    def use_public_factory_methods(self):
        return self.use_factory_methods(is_public)

    def use_all_factory_methods(self):
        return self.use_factory_methods(_always)

    def creators(self):
        creators = list(self.explicit_creators)
        for creator in self.find_creators(
            self.target, self.constructor_filters, self.factory_filters
        ):
            if creator not in creators:
                creators.append(creator)
        return creators

    def delegate(self):
        """The arbitrary choosing between all creators, resolved on first use.

        Resolution happens under a lock, so threads sharing this arbitrary
        all see the same fully built delegate.
        """
        with self._lock:
            if self._resolved is None:
                creators = self.creators()
                if not creators:
                    raise NoCreatorsFound(self.target)
                self._resolved = one_of(*map(self._creator_arbitrary, creators))
            return self._resolved

    def do_validate(self):
        self.delegate()

    def _creator_arbitrary(self, creator):
        hints = _parameter_hints(creator)
        positional = []
        keyword = []
        arbitraries = []
        for name, parameter in inspect.signature(creator).parameters.items():
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue
            annotation = hints.get(name, parameter.annotation)
            if annotation is parameter.empty:
                if parameter.default is not parameter.empty:
                    continue
                raise CannotFindArbitrary(annotation, creator)
            candidates = list(self.resolve_parameter(annotation))
            if not candidates:
                raise CannotFindArbitrary(annotation, creator)
            arbitraries.append(
                candidates[0] if len(candidates) == 1 else one_of(*candidates)
            )
            if parameter.kind is parameter.POSITIONAL_ONLY:
                positional.append(name)
            else:
                keyword.append(name)

        def call(*values):
            args = values[: len(positional)]
            kwargs = dict(zip(keyword, values[len(positional) :]))
            return creator(*args, **kwargs)

        call.__name__ = getattr(creator, "__name__", "call")
        return combine(*arbitraries).as_(call)

    def do_generator(self, size):
        return self.delegate().generator(size)

    def do_edge_cases(self, max_edge_cases):
        return iter(self.delegate().edge_cases(max_edge_cases))

    def do_exhaustive(self, ceiling):
        return self.delegate().exhaustive(ceiling)


def for_type(
    target: type,
    *,
    find_creators: typing.Optional[typing.Callable[..., typing.Any]] = None,
    resolve_parameter: typing.Optional[typing.Callable[..., typing.Any]] = None,
) -> TypeArbitrary:
    """An arbitrary of ``target`` values made by calling its creators."""
    check_type(type, target, "target")
    kwargs = {}
    if find_creators is not None:
        check_callable(find_creators, "find_creators")
        kwargs["find_creators"] = find_creators
    if resolve_parameter is not None:
        check_callable(resolve_parameter, "resolve_parameter")
        kwargs["resolve_parameter"] = resolve_parameter
    return TypeArbitrary(target, **kwargs)
