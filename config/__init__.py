"""Bundled run configuration (run_config.toml)."""
