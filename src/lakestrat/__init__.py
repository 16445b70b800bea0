"""`lakestrat` - Lake stratification and stability indices from temperature profiles.

Subpackages:
- lake: Bathymetry, density, interpolation, stratification, layers, stability
- pipeline: Time-series orchestrator and per-row processor
- schemas: Pydantic configuration
- contracts: Error types and fail-fast input/output checks
"""

__version__ = "0.1.0"
