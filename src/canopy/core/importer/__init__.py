"""Loading forests from files."""
