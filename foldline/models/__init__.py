"""Domain models for stylesheets and selector profiles."""
