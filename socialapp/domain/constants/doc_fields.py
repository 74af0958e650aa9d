"""Constants for fields every document carries"""


class DocFields:
    """Field name constants maintained by the collection"""
    ID = "_id"
    DATE_CREATED = "date_created"
    DATE_UPDATED = "date_updated"
