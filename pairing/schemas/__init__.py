"""
Pydantic schemas for API request and response validation.

Every error response, whatever its status code, uses ErrorResponse.
"""
