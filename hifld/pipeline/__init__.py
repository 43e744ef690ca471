"""
Fire station data pipeline: normalization, persistence and jobs.
"""
