"""Application layer: the session lifecycle operations and their ports."""
