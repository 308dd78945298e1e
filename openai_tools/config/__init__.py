"""
Configuration module for the openai_tools library.

Key components:
- constants: Library-wide constants such as the logger name, default endpoint,
  default models per operation family and WebSocket tuning values.
- logging_config: Opt-in console and rotating-file logging for applications.
- settings: ``.env`` loading and environment variable access.

Usage examples:
```python
from openai_tools.config.constants import LOGGER_NAME, DEFAULT_BASE_URL

from openai_tools.config.logging_config import configure_logging
logger = configure_logging()
logger.info("Application started")

from openai_tools.config.settings import load_env
load_env()
```
"""
