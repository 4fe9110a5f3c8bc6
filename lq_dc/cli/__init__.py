"""Command-line interface for lq-dc license tooling."""
