"""shiptrack: shipment tracking API with role-gated order lifecycle and Redis-backed sessions."""
