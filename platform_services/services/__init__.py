"""Storage and auth handle factories."""
