"""HTTP API for shelf scans."""
