"""Console rendering for the vecbatch CLI."""
