"""Constants for error messages.

This module contains constants for common error messages and exception texts
to make the test suite less fragile and more maintainable.
"""

# Command error messages
COMMAND_MISSING_KEY_ERROR = "missing key"
COMMAND_USAGE_MESSAGE = "usage: {usage}"
COMMAND_TOKENIZE_ERROR = "Error parsing command line: {error}"

# Storage error messages
STORAGE_READ_ERROR = "Unable to read settings: {error}"
STORAGE_WRITE_ERROR = "Unable to write setting {key}: {error}"
STORAGE_DELETE_ERROR = "Unable to delete setting {key}: {error}"
STORAGE_KEY_NOT_FOUND = "Setting {key} does not exist"

# Configuration error messages
CONFIG_UNSUPPORTED_FORMAT_ERROR = (
    "Unsupported configuration file format: {suffix}. Use YAML (.yaml/.yml)."
)
CONFIG_STORE_PATH_REQUIRED_ERROR = "Store backend {backend} requires a path"
