"""
Domain services

Pure business rules: pricing, customer lifecycle, follow-up scheduling and
dashboard aggregation.
"""
