"""Constants for Favorite relation field names"""


class FavoriteFields:
    """Field name constants for Favorite documents"""
    USER = "user"
    ITEM = "item"
