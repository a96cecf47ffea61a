"""Application layer: DTOs, ports and services (order lifecycle, auth, users, health)."""
