"""Constants for friend request and friendship field names"""


class FriendRequestFields:
    """Field name constants for FriendRequest documents"""
    FROM = "from"
    TO = "to"
    STATUS = "status"

    # Status values
    PENDING = "pending"
    REJECTED = "rejected"


class FriendshipFields:
    """Field name constants for Friendship documents"""
    USER1 = "user1"
    USER2 = "user2"
    PAIR = "pair"  # order-independent key of (user1, user2), unique
