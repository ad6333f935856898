"""Configuration: settings discovery, TOML overrides, and logging setup."""
