"""Tree controller internals."""
