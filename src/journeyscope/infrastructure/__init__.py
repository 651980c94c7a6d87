"""Infrastructure layer: clocks, error normalization, listener isolation."""
