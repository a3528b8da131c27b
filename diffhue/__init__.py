"""Theme resolution for the diffhue diff viewer."""
