"""Code-hosting adapters."""
