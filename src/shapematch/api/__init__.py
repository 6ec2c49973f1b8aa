"""
HTTP host for a shapematch query session.
"""
