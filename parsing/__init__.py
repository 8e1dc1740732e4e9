"""CSS parsing and design-token extraction."""
