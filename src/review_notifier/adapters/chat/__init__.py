"""Chat delivery adapters."""
