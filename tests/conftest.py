# This file is part of Arbitraries, a value generation and shrinking core for
# property-based testing.
#
# Copyright the Arbitraries Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import pytest
from hypothesis import settings as Settings

from arbitraries._settings import settings

# Shrinking runs inside some property tests, which makes their timing too
# variable for a deadline.
Settings.register_profile("arbitraries", deadline=None, max_examples=50)
Settings.load_profile("arbitraries")


@pytest.fixture(scope="function", autouse=True)
def _default_settings():
    settings.load_profile("default")
    yield
    settings.load_profile("default")
