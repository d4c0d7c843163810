"""Domain types and pure rules (entities, chirp content validation)."""
