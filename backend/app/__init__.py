"""
Weather Dashboard backend.

Location registry, favorites and visit history ledgers, and thin
pass-through access to the weather and text-generation providers.
"""

__version__ = "0.1.0"
