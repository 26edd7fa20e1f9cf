"""Offices app package.

This app encapsulates office listings: the office model with its images
and tags, the listing policy deciding who sees and books what, the
listing queries and the host-side mutations.
"""
