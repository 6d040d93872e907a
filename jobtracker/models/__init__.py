"""
API request/response schemas.

JSON bodies use camelCase; Python attributes stay snake_case.
"""
