"""Limits and permission nodes for the core module."""

REPEAT_LIMIT = 10

PING_NODE = "gagbot:core:ping"
REPEAT_NODE = "gagbot:core:repeat"
SQRT_NODE = "gagbot:core:sqrt"
LASTLOG_NODE = "gagbot:core:lastlog"
PREFIX_NODE = "gagbot:core:prefix"
PERMISSION_SET_NODE = "gagbot:permission:set"
PERMISSION_LIST_NODE = "gagbot:permission:list"

NO_PERMISSIONS_MESSAGE = "No perms set."
