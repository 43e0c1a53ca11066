"""Package-wide logger.

Handler and format configuration is left to the application.
"""

import logging

logger = logging.getLogger("pfotrack")
