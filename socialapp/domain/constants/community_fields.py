"""Constants for Community document field names"""


class CommunityFields:
    """Field name constants for Community documents"""
    AUTHOR = "author"
    TITLE = "title"
    DESCRIPTION = "description"
    MEMBERS = "members"
