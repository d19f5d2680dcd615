"""
Chain - daily task tracking.

Architecture:
- models/listing/operations: the task data model and operation handling
- today/history: read-only report views over a listing
- navigation: interactive selection state machine
- storage: JSON persistence gateway
- cli.py / tui/: interaction shells
"""

__version__ = "0.1.0"
