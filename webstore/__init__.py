"""
WebStore reporting package
Read-only report queries over the retail database
"""
