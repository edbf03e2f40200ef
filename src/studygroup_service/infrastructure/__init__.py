"""Infrastructure adapters: database and observability."""
