"""Application layer: DTOs, ports (repository protocols), and use cases."""
