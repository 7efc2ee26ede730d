"""Document database handle factory."""
