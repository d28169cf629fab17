"""Host adapters that consume the engine."""
