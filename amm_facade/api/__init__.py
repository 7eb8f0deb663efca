"""HTTP service exposing the facade over an in-memory system."""
