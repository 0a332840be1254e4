"""
Month-scoped sales analytics: statistics, price ranges, categories.
"""
