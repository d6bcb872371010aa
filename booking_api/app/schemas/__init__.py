"""
Pydantic schema definitions for API payloads.

Records themselves are opaque documents, so the schemas here only cover
acknowledgements and session responses.
"""
