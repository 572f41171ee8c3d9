"""Infrastructure layer: PostgreSQL pool and repository implementations."""
