"""Core publish and revert logic for pubctl."""
