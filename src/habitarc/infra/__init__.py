"""Infrastructure: database access and repository implementations."""
