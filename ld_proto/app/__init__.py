"""Language detection service application."""
