"""
Application Layer
=================

Synchronizations between concepts.

Contains:
- Synchronizations: per-endpoint sequencing of concept calls
- Responses: display denormalization and error resolvers
- Enrichment registry: error kind -> message resolver
- DTOs: request bodies
"""
