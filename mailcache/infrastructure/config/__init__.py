"""Configuration loading (defaults, YAML file, .env, environment)."""
