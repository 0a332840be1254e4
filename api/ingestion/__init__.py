"""
Seeding the products table from the transaction feed.
"""
