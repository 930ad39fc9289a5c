"""Domain layer: queue entries, resources, votes and shared kernel."""
