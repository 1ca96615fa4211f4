"""JSON schema validation."""
