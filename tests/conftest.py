"""Root pytest configuration for all tests."""

import logging

# Conversion warnings are logged at WARNING; keep DEBUG token traces out of
# captured output unless a test opts in with caplog.
logging.getLogger("md2adf").setLevel(logging.INFO)
