"""Infrastructure: persistence, external services, security, scheduling."""
