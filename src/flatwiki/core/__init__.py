"""Page resolution and content processing."""
