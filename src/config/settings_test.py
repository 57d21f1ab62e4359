"""Settings for the test suite.

``config.settings`` refuses to start without ``SECRET_KEY``; tests get a
throwaway key unless the environment already provides one.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-only-secret-key")

from config.settings import *  # noqa: E402,F401,F403
