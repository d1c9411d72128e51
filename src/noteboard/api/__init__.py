"""HTTP API packages."""
