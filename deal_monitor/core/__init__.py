"""Settings, logging and error types."""
