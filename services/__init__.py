"""
External services used by GeoSmart Mapper.
"""
