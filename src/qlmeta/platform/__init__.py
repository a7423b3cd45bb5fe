"""Infrastructure adapters: logging and storage backends."""
