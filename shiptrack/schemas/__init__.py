"""HTTP request/response models (pydantic)."""
