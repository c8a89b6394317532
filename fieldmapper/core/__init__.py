"""Configuration, error types and the declarative base shared by all features."""
