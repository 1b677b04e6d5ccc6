"""Stages, steps and parameter forms of process programs, with a paged program library."""

__version__ = "0.1.0"

__all__ = ["cli", "editor", "forms", "library", "model", "multiselect"]