"""pytest integration: fixtures managing the documentation context."""
