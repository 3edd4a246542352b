"""FormatGenius HTTP API"""
