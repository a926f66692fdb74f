"""Limits and permission nodes for the admin module."""

# Bulk deletion accepts at most this many messages per request.
PURGE_LIMIT = 100

PURGE_NODE = "gagbot:admin:purge"
