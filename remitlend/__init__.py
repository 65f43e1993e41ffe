"""RemitLend backend: credit score and repayment simulation API."""

import time

__version__ = "0.1.0"

# Monotonic reference for /health uptime, taken when the service loads.
STARTED_MONOTONIC = time.monotonic()
