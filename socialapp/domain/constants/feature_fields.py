"""Constants for Feature document field names"""


class FeatureFields:
    """Field name constants for Feature documents"""
    ITEM = "item"
