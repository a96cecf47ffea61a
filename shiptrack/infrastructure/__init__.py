"""Infrastructure: Redis cache and sessions, SQL persistence, security."""
