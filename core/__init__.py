"""
Core domain for GeoSmart Mapper: data model, UTM projection and survey session.
"""
