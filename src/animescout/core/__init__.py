"""Core components - config, backends, throttling, catalog state."""
