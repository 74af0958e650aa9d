"""Constants for User document field names"""


class UserFields:
    """Field name constants for User documents"""
    USERNAME = "username"
    PASSWORD = "password"
