# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""A module controlling settings for generation and shrinking.

Either an explicit settings object can be used or the default object on
this module can be modified.
"""

import contextlib
import datetime
from enum import IntEnum, unique

import attr

from arbitraries.errors import InvalidArgument, InvalidState
from arbitraries.internal.validation import check_type
from arbitraries.utils.conventions import not_set
from arbitraries.utils.dynamicvariables import DynamicVariable

__all__ = ["settings"]

all_settings = {}


class settingsProperty:
    def __init__(self, name, show_default):
        self.name = name
        self.show_default = show_default

    def __get__(self, obj, type=None):
        if obj is None:
            return self
        try:
            return obj.__dict__[self.name]
        except KeyError:
            raise AttributeError(self.name) from None

    def __set__(self, obj, value):
        obj.__dict__[self.name] = value

    def __delete__(self, obj):
        raise AttributeError(f"Cannot delete attribute {self.name}")

    @property
    def __doc__(self):
        description = all_settings[self.name].description
        default = (
            repr(getattr(settings.default, self.name))
            if self.show_default
            else "(dynamically calculated)"
        )
        return f"{description}\n\ndefault value: ``{default}``"


default_variable = DynamicVariable(None)


class settingsMeta(type):
    @property
    def default(cls):
        v = default_variable.value
        if v is not None:
            return v
        if hasattr(settings, "_current_profile"):
            settings.load_profile(settings._current_profile)
            assert default_variable.value is not None
        return default_variable.value

    def _assign_default_internal(cls, value):
        default_variable.value = value

    def __setattr__(cls, name, value):
        if name == "default":
            raise AttributeError(
                "Cannot assign to the property settings.default - "
                "consider using settings.load_profile instead."
            )
        elif not (isinstance(value, settingsProperty) or name.startswith("_")):
            raise AttributeError(
                f"Cannot assign arbitraries.settings.{name}={value!r} - the settings "
                "class is immutable.  You can change the global default "
                "settings with settings.load_profile, or use local_settings(...) "
                "for a single block of code instead."
            )
        return type.__setattr__(cls, name, value)


class settings(metaclass=settingsMeta):
    """A settings object controls the parameters used while generating,
    enumerating and shrinking values.

    Default values are picked up from the settings.default object and
    changes made there will be picked up in newly created settings.
    """

    _WHITELISTED_REAL_PROPERTIES = ["_construction_complete"]
    __definitions_are_locked = False
    _profiles = {}
    __module__ = "arbitraries"

    def __getattr__(self, name):
        if name in all_settings:
            return all_settings[name].default
        else:
            raise AttributeError(f"settings has no attribute {name}")

    def __init__(self, parent=None, **kwargs):
        if parent is not None and not isinstance(parent, settings):
            raise InvalidArgument(
                f"Invalid argument: parent={parent!r} is not a settings instance"
            )
        self._construction_complete = False
        defaults = parent or settings.default
        if defaults is not None:
            for setting in all_settings.values():
                if kwargs.get(setting.name, not_set) is not_set:
                    kwargs[setting.name] = getattr(defaults, setting.name)
                elif setting.validator:
                    kwargs[setting.name] = setting.validator(kwargs[setting.name])
        for name, value in kwargs.items():
            if name not in all_settings:
                raise InvalidArgument(f"Invalid argument: {name!r} is not a valid setting")
            setattr(self, name, value)
        self._construction_complete = True

    @classmethod
    def _define_setting(
        cls, name, description, default, options=None, validator=None, show_default=True
    ):
        """Add a new setting.

        - name is the name of the property that will be used to access the
          setting. This must be a valid python identifier.
        - description will appear in the property's docstring
        - default is the default value.
        """
        if settings.__definitions_are_locked:
            raise InvalidState("settings have been locked and may no longer be defined.")
        if options is not None:
            options = tuple(options)
            assert default in options
        else:
            assert validator is not None

        all_settings[name] = Setting(
            name=name,
            description=description.strip(),
            default=default,
            options=options,
            validator=validator,
        )
        setattr(settings, name, settingsProperty(name, show_default))

    @classmethod
    def lock_further_definitions(cls):
        settings.__definitions_are_locked = True

    def __setattr__(self, name, value):
        if name in settings._WHITELISTED_REAL_PROPERTIES:
            return object.__setattr__(self, name, value)
        elif name in all_settings:
            if self._construction_complete:
                raise AttributeError(
                    "settings objects are immutable and may not be assigned to"
                    " after construction."
                )
            else:
                setting = all_settings[name]
                if setting.options is not None and value not in setting.options:
                    raise InvalidArgument(
                        f"Invalid {name}, {value!r}. Valid options: {setting.options!r}"
                    )
                return object.__setattr__(self, name, value)
        else:
            raise AttributeError(f"No such setting {name}")

    def __repr__(self):
        bits = sorted(f"{name}={getattr(self, name)!r}" for name in all_settings)
        return "settings({})".format(", ".join(bits))

    def show_changed(self):
        bits = []
        for name, setting in all_settings.items():
            value = getattr(self, name)
            if value != setting.default:
                bits.append(f"{name}={value!r}")
        return ", ".join(sorted(bits, key=len))

    @staticmethod
    def register_profile(name, parent=None, **kwargs):
        """Registers a collection of values to be used as a settings profile.

        Settings profiles can be loaded by name - for example, you might
        create a 'ci' profile that allows longer shrinking and keep the
        'default' profile for local runs.

        The arguments to this method are exactly as for
        :class:`~arbitraries.settings`: optional ``parent`` settings, and
        keyword arguments for each setting that will be set differently to
        parent (or settings.default, if parent is None).
        """
        check_type(str, name, "name")
        settings._profiles[name] = settings(parent=parent, **kwargs)

    @staticmethod
    def get_profile(name):
        """Return the profile with the given name."""
        check_type(str, name, "name")
        try:
            return settings._profiles[name]
        except KeyError:
            raise InvalidArgument(f"Profile {name!r} is not registered") from None

    @staticmethod
    def load_profile(name):
        """Loads in the settings defined in the profile provided.

        If the profile does not exist, InvalidArgument will be raised.
        Any setting not defined in the profile will be the library
        defined default for that setting.
        """
        check_type(str, name, "name")
        settings._current_profile = name
        settings._assign_default_internal(settings.get_profile(name))


@contextlib.contextmanager
def local_settings(s):
    with default_variable.with_value(s):
        yield s


@attr.s()
class Setting:
    name = attr.ib()
    description = attr.ib()
    default = attr.ib()
    options = attr.ib()
    validator = attr.ib()


def _positive_int_validator(name):
    def validate(x):
        check_type(int, x, name)
        if isinstance(x, bool) or x < 1:
            raise InvalidArgument(f"{name}={x!r} should be at least one.")
        return x

    validate.__name__ = f"_validate_{name}"
    return validate


def _non_negative_int_validator(name):
    def validate(x):
        check_type(int, x, name)
        if isinstance(x, bool) or x < 0:
            raise InvalidArgument(f"{name}={x!r} should not be negative.")
        return x

    validate.__name__ = f"_validate_{name}"
    return validate


@unique
class Verbosity(IntEnum):
    quiet = 0
    normal = 1
    verbose = 2
    debug = 3

    def __repr__(self):
        return f"Verbosity.{self.name}"


settings._define_setting(
    "verbosity",
    options=tuple(Verbosity),
    default=Verbosity.normal,
    description="Control the verbosity level of Arbitraries messages",
)


settings._define_setting(
    "generation_size",
    default=1000,
    validator=_positive_int_validator("generation_size"),
    description="""
The size hint handed to ``Arbitrary.generator()`` when none is given
explicitly.  It scales collection lengths, numeric ranges and chain lengths,
but never affects which values are valid.
""",
)


settings._define_setting(
    "max_edge_cases",
    default=100,
    validator=_non_negative_int_validator("max_edge_cases"),
    description="""
The maximum number of edge cases ``Arbitrary.edge_cases()`` returns when no
explicit maximum is given.
""",
)


settings._define_setting(
    "max_exhaustive_count",
    default=1000,
    validator=_positive_int_validator("max_exhaustive_count"),
    description="""
The ceiling for exhaustive generation.  An arbitrary whose domain holds more
values than this reports that it cannot be enumerated exhaustively.
""",
)


settings._define_setting(
    "max_filter_misses",
    default=10000,
    validator=_positive_int_validator("max_filter_misses"),
    description="""
How many consecutive values a filtered or unique arbitrary may reject before
giving up with :class:`~arbitraries.errors.TooManyFilterMisses`.
""",
)


settings._define_setting(
    "max_shrink_steps",
    default=10000,
    validator=_positive_int_validator("max_shrink_steps"),
    description="""
Once a shrinking sequence has taken this many steps it stops and reports the
smallest falsifying value found so far.
""",
)


class duration(datetime.timedelta):
    """A timedelta specifically measured in milliseconds."""

    def __repr__(self):
        ms = self.total_seconds() * 1000
        return f"timedelta(milliseconds={int(ms) if ms == int(ms) else ms!r})"


def _validate_shrink_deadline(x):
    if x is None:
        return x
    invalid_deadline_error = InvalidArgument(
        f"shrink_deadline={x!r} (type {type(x).__name__}) must be a timedelta "
        "object, an integer or float number of milliseconds, or None to shrink "
        "without a time limit."
    )
    if isinstance(x, (int, float)):
        if isinstance(x, bool):
            raise invalid_deadline_error
        try:
            x = duration(milliseconds=x)
        except OverflowError:
            raise InvalidArgument(
                f"shrink_deadline={x!r} is invalid, because it is too large to "
                "represent as a timedelta. Use shrink_deadline=None instead."
            ) from None
    if isinstance(x, datetime.timedelta):
        if x <= datetime.timedelta(0):
            raise InvalidArgument(
                f"shrink_deadline={x!r} is invalid, because it is impossible to "
                "meet a deadline <= 0. Use shrink_deadline=None instead."
            )
        return duration(seconds=x.total_seconds())
    raise invalid_deadline_error


settings._define_setting(
    "shrink_deadline",
    default=duration(seconds=10),
    validator=_validate_shrink_deadline,
    description="""
If set, a duration (as timedelta, or integer or float number of milliseconds)
after which a shrinking sequence stops and reports the smallest falsifying
value found so far.

Set this to None to shrink until no smaller candidate can be found.
""",
)

settings.lock_further_definitions()


settings.register_profile("default", settings())
settings.load_profile("default")
assert settings.default is not None
