"""Analysis of simulated patterns."""
