"""
Settings command handlers with auto-discovery.

Every module in this package registers its handler with the settings command
registry at import time. Importing the package imports them all.
"""

import importlib
import logging
import pkgutil

logger = logging.getLogger(__name__)

for module_info in pkgutil.iter_modules(__path__):
    if module_info.name == "base_handler" or module_info.name.startswith("_"):
        continue
    importlib.import_module(f"{__name__}.{module_info.name}")
    logger.debug(f"Imported settings handler module: {module_info.name}")
