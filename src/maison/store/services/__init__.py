"""Store service layer.

Views call these functions instead of manipulating store models directly.
"""
