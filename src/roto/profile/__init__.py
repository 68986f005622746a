"""User profile: field codec, persistence and cached state."""
