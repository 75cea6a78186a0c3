"""ZEV billing administration service."""
