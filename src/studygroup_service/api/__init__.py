"""HTTP surface for the study group service."""
