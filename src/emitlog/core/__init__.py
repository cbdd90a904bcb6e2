"""Core event model, formatting, and configuration for emitlog."""
