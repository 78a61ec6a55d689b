"""Constants for text written to the command output sink.

Records for ``settings get`` and ``settings show all`` are rendered as a
left-justified label padded to ``LABEL_WIDTH`` followed by the value. Labels
longer than the width are not truncated.
"""

LABEL_WIDTH = 20

# Application identity, as announced on CLI start-up
APP_NAME = "Config / Settings Management"
APP_LOADED_MESSAGE = "Config / Settings management app loaded."

# Confirmation lines for mutating commands
SETTING_SET_MESSAGE = "{key} set"
SETTING_SET_FAILED_MESSAGE = "{key} could not be set"
SETTING_DELETED_MESSAGE = "{key} deleted"
SETTING_DELETE_FAILED_MESSAGE = "{key} could not be deleted"

# Trace labels printed by ``settings set`` at high verbosity
TRACE_TOKENS_LABEL = "Tokens:"
TRACE_KEY_LABEL = "Key will be:"
TRACE_VALUE_LABEL = "Value will be:"
TRACE_RESULT_LABEL = "Store returned:"

# Host-side messages
COMMAND_NOT_RECOGNIZED_MESSAGE = "Command not recognized: {line}"
