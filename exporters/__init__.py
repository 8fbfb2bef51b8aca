"""
KML/KMZ export of captured points.
"""
