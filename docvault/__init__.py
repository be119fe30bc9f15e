"""
docvault

PDF document management backend with tag search and single-use,
time-limited download links.
"""

__version__ = "1.0.0"
