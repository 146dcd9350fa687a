"""Output schemas and path conventions for simulation artifacts."""
