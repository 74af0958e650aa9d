"""
Concepts
========

Each concept owns its collection(s), takes only ids and scalars, and never
imports another concept.
"""
from .authing import AuthingConcept
from .communiting import CommunitingConcept
from .favoriting import FavoritingConcept
from .featuring import FeaturingConcept
from .feeding import FeedingConcept
from .friending import FriendingConcept
from .posting import PostingConcept
from .sessioning import SessioningConcept

__all__ = [
    "AuthingConcept",
    "CommunitingConcept",
    "FavoritingConcept",
    "FeaturingConcept",
    "FeedingConcept",
    "FriendingConcept",
    "PostingConcept",
    "SessioningConcept",
]
