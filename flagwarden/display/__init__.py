"""Console output: resolution messages and logging setup."""
