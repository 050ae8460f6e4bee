"""op-finder - browse and fuzzy-search an op registry."""
