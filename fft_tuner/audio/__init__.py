"""Per-block audio processing."""
