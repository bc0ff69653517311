"""Application layer: ports shared by the domain and the adapters."""
