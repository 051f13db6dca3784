"""Host adapters for the ed engine."""
