"""osintkit: OSINT aggregation and risk-scoring engine."""

__version__ = "1.0.0"
