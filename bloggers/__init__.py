"""
Bloggers platform - blog, post, comment and user content API.
"""

__version__ = "0.1.0"
