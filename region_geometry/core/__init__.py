"""Core utilities and shared infrastructure.

- config: Engine configuration loading and validation
- constants: Named constants (WGS 84 bounds, Earth radius, thresholds)
- exceptions: Custom exception hierarchy
"""
