"""Infrastructure: persistence, external services, service implementations."""
