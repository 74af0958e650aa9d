"""
API Package
===========

HTTP transport for the synchronizations.
"""
