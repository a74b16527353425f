"""Configuration for touchgrass: constants and persisted settings."""
