"""Constants for Post document field names"""


class PostFields:
    """Field name constants for Post documents"""
    AUTHOR = "author"
    CONTENT = "content"
    OPTIONS = "options"

    # Keys inside OPTIONS
    BACKGROUND_COLOR = "background_color"
