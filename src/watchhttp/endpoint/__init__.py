"""HTTP front for watchhttp.

Serves the latest command output on every path, with headers that make
browsers refresh the page at the command interval.
"""
