"""watchhttp -- Run a command periodically and serve its latest STDOUT over HTTP.

Any CLI becomes a live web page: the command is re-run on a fixed
interval and the most recent output is exposed on a single endpoint,
optionally rendered as HTML with numeric changes highlighted between
snapshots.
"""

__version__ = "0.1.0"
