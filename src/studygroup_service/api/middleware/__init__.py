"""Request handling middleware."""
