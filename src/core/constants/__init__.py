"""Constants module for the settings console.

This module contains various constants used throughout the application and tests
to make the codebase more maintainable and the tests less fragile.
"""

from .command_output_constants import *  # noqa: F403
from .error_constants import *  # noqa: F403
