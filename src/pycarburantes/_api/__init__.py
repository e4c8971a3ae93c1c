"""Record source endpoint modules (internal)."""
