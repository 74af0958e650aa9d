"""
Social Concepts
===============

Social app backend composed from independent concepts
(accounts, sessions, posts, friends, communities, feeds, favorites,
featuring) synchronized per request.
"""
__version__ = "1.0.0"
