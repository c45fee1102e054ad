"""Command-line front end for prompt-builder."""
