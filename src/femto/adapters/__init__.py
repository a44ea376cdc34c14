"""Host integrations for the editing session."""
