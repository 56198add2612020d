"""Host integrations for the input engine."""
