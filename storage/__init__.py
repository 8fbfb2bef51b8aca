"""
Persistence of the captured point collection.
"""
