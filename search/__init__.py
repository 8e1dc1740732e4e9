"""Design-token index: value normalization, storage and lookups."""
