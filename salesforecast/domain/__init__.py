"""Domain models, validation rules and exceptions."""
