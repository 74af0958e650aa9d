"""
Domain Layer
============

Core business logic: concepts and the error taxonomy they raise.
This layer has no dependencies on web frameworks or storage drivers.

Contains:
- Concepts: independently owned slices of state with actions and assertions
- Repository Interfaces: the DocCollection contract concepts persist through
- Errors: NotFound / NotAllowed roots and their parameterized subtypes
"""
