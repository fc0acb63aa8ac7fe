"""Application layer - orchestrates the domain for a host."""
