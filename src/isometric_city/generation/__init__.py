"""
Procedural city generation for Isometric City.

This module turns city characteristics into a typed cell grid, including:
- Map-shape bounds (square, circle, coastal, river)
- Water feature synthesis (lakes, rivers, coastline)
- Road patterns and stochastic building placement
"""
