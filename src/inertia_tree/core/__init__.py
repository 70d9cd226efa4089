"""Core engine: tensor math, rigid systems and diagnostics."""
