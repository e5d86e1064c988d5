"""skillport logging configuration.

skillport uses the shared InstruktAI logging standard (`instrukt_ai_logging`).
The level comes from `SKILLPORT_LOG_LEVEL`; the CLI's `--log-level` flag
overrides it. Stdout stays reserved for the generated skill path.
"""

from __future__ import annotations

import os
from typing import Optional

from instrukt_ai_logging import configure_logging


def setup_logging(level: Optional[str] = None) -> None:
    """Configure skillport logging.

    Args:
        level: Optional override for `SKILLPORT_LOG_LEVEL`.
    """
    if level:
        os.environ["SKILLPORT_LOG_LEVEL"] = level

    configure_logging("skillport")
