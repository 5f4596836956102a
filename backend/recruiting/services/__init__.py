"""
Talent search services.
"""
