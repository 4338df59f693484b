"""Environment-driven server configuration."""
