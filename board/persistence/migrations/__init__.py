"""Schema migrations for the community board."""
