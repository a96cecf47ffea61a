"""Application DTOs (frozen dataclasses, no ORM dependency)."""
