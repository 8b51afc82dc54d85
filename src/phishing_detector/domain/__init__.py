"""Domain models and pure analysis helpers."""
