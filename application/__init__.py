"""Application workflows that tie parsing to files and settings."""
