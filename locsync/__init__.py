"""
locsync — translation project synchronization tool.

Uploads local source files to a remote translation service, reports
per-locale translation progress, and pulls translated files back,
reusing previously fetched translations from a local cache.
"""

__version__ = "0.4.0"
