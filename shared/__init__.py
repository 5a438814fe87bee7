"""Shared infrastructure for Anagram Rush.

- controllog: Double-entry accounting SDK for structured event logging
- utils: Common utilities (JSON logging setup)
"""

__version__ = "0.1.0"
