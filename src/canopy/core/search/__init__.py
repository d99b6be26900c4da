"""Search over indexed node labels."""
