"""Core components: API plumbing, authentication and uploads."""
