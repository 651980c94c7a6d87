"""Application layer: runner, collectors, reporters, executor."""
