"""
Pydantic schemas for API request/response validation.

Node and catalog models are served as-is from the domain layer; this package
holds the request/response shapes specific to the API.
"""

# Re-export schemas for convenient imports.
from .rule import RenderResponse as RenderResponse
from .rule import RuleSnapshot as RuleSnapshot
