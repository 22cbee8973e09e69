"""Core models and collaborator interfaces for Appforge."""
