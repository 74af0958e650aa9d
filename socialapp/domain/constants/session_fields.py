"""Constants for Session document field names"""


class SessionFields:
    """Field name constants for Session documents"""
    TOKEN = "token"
    USER = "user"
