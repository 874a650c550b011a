"""Service-layer entry points shared by the CLI and the API."""
