"""JSON schemas shipped as package data for repoenforcer."""
