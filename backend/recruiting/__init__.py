"""
Esports recruiting backend: AI-powered talent search.
"""
