"""
private-resources

Serves non-public files through signed, expiring, optionally session-bound
tokens passed in the `__protectedResource` request argument.
"""

__version__ = "1.0.0"
