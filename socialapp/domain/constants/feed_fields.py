"""Constants for Feed relation field names"""


class FeedFields:
    """Field name constants for Feed documents"""
    FEED = "feed"
    ITEM = "item"
