"""Host adapters for embedding field editors in UI toolkits."""
