"""Service layer: the quote engine and its data providers."""
