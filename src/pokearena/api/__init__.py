"""HTTP API for Pokearena."""
