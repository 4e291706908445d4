"""Host adapters for cursor history."""
